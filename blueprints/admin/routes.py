"""
Admin routes.
Platform administration: restaurant approval, registrations, clients and user accounts.
"""

import sqlite3

from flask import Blueprint, current_app
from flask_login import current_user

from blueprints.admin.services import validate_user_creation, can_delete_user, review_registration
from blueprints.auth.forms import AdminUserForm, PasswordResetForm
from models.client import get_all_clients_with_stats
from models.registration import REGISTRATION_STATUSES, get_all_registrations
from models.restaurant import (
    get_all_restaurants_admin, get_restaurant_by_id, set_approval_status, set_blocked, delete_restaurant
)
from models.user import (
    get_all_users, get_user_by_id, create_user, update_user, update_password, delete_user, to_public
)
from utils.api_response import api_success, api_error, form_error
from utils.decorators import admin_required
from utils.helpers import get_json_payload, json_formdata
from utils.messages import MESSAGES

admin_bp = Blueprint('admin', __name__)


# =============================================================================
# RESTAURANTS
# =============================================================================

@admin_bp.route('/restaurants')
@admin_required
def restaurants():
    """All restaurants, with the owner's email."""
    return api_success(data=get_all_restaurants_admin())


def _set_status(restaurant_id: int, status: str):
    if not set_approval_status(restaurant_id, status):
        return api_error(MESSAGES['restaurant_not_found'], status=404)

    current_app.logger.info(f'Restaurant {restaurant_id} {status} by {current_user.email}')
    return api_success(data=get_restaurant_by_id(restaurant_id), message=MESSAGES['restaurant_updated'])


@admin_bp.route('/restaurants/<int:restaurant_id>/approve', methods=['PATCH'])
@admin_required
def restaurant_approve(restaurant_id):
    return _set_status(restaurant_id, 'approved')


@admin_bp.route('/restaurants/<int:restaurant_id>/reject', methods=['PATCH'])
@admin_required
def restaurant_reject(restaurant_id):
    return _set_status(restaurant_id, 'rejected')


@admin_bp.route('/restaurants/<int:restaurant_id>/block', methods=['PATCH'])
@admin_required
def restaurant_block(restaurant_id):
    """
    Block or unblock a restaurant.

    Request body:
        blocked: bool (default true)
    """
    blocked = bool(get_json_payload().get('blocked', True))
    if not set_blocked(restaurant_id, blocked):
        return api_error(MESSAGES['restaurant_not_found'], status=404)

    current_app.logger.info(
        f'Restaurant {restaurant_id} {"blocked" if blocked else "unblocked"} by {current_user.email}'
    )
    return api_success(data=get_restaurant_by_id(restaurant_id), message=MESSAGES['restaurant_updated'])


@admin_bp.route('/restaurants/<int:restaurant_id>', methods=['DELETE'])
@admin_required
def restaurant_delete(restaurant_id):
    """Delete a restaurant with its bookings, closed days, floor plan and team."""
    if not get_restaurant_by_id(restaurant_id):
        return api_error(MESSAGES['restaurant_not_found'], status=404)

    delete_restaurant(restaurant_id)
    current_app.logger.info(f'Restaurant {restaurant_id} deleted by {current_user.email}')
    return api_success(message=MESSAGES['restaurant_deleted'])


# =============================================================================
# REGISTRATIONS
# =============================================================================

@admin_bp.route('/registrations')
@admin_required
def registrations():
    return api_success(data=get_all_registrations())


@admin_bp.route('/registrations/<int:registration_id>', methods=['PATCH'])
@admin_required
def registration_update(registration_id):
    """
    Review a registration request.

    Request body:
        status: 'pending', 'approved' or 'rejected'
        admin_notes: Optional notes

    Approving creates the restaurant, owned by the requester and already approved.
    """
    data = get_json_payload()
    status = data.get('status')
    if status not in REGISTRATION_STATUSES:
        return api_error(MESSAGES['invalid_approval_status'])

    try:
        registration, restaurant_id = review_registration(registration_id, status, data.get('admin_notes'))
    except ValueError as error:
        current_app.logger.warning(f'Registration {registration_id} not approved: {error}')
        return api_error(str(error))

    if not registration:
        return api_error(MESSAGES['registration_not_found'], status=404)

    return api_success(
        data=registration,
        message=MESSAGES['registration_updated'],
        restaurant_id=restaurant_id
    )


# =============================================================================
# CLIENTS
# =============================================================================

@admin_bp.route('/clients')
@admin_required
def clients():
    """Every client with platform-wide booking counts."""
    return api_success(data=get_all_clients_with_stats())


# =============================================================================
# USERS
# =============================================================================

@admin_bp.route('/users')
@admin_required
def users():
    return api_success(data=get_all_users())


@admin_bp.route('/users', methods=['POST'])
@admin_required
def users_create():
    """
    Create a user.

    Request body:
        email, password (>= 6), first_name, last_name, is_admin
    """
    form = AdminUserForm(formdata=json_formdata(get_json_payload()))
    if not form.validate():
        return form_error(form)

    is_valid, error_msg = validate_user_creation(form.email.data.strip().lower(), form.password.data)
    if not is_valid:
        return api_error(error_msg)

    try:
        user_id = create_user(
            email=form.email.data,
            password=form.password.data,
            first_name=form.first_name.data,
            last_name=form.last_name.data,
            is_admin=form.is_admin.data,
            user_type='admin' if form.is_admin.data else 'client'
        )
    except sqlite3.IntegrityError:
        return api_error(MESSAGES['user_exists'])

    current_app.logger.info(f'User {user_id} created by {current_user.email}')
    return api_success(data=to_public(get_user_by_id(user_id)), message=MESSAGES['user_created'], status=201)


@admin_bp.route('/users/<int:user_id>/toggle-admin', methods=['PATCH'])
@admin_required
def users_toggle_admin(user_id):
    """Grant or revoke administrator rights."""
    user = get_user_by_id(user_id)
    if not user:
        return api_error(MESSAGES['user_not_found'], status=404)

    update_user(user_id, is_admin=not user['is_admin'])
    return api_success(data=to_public(get_user_by_id(user_id)), message=MESSAGES['user_updated'])


@admin_bp.route('/users/<int:user_id>/password', methods=['PATCH'])
@admin_required
def users_reset_password(user_id):
    """
    Reset a user's password.

    Request body:
        password: New password (>= 6)
    """
    if not get_user_by_id(user_id):
        return api_error(MESSAGES['user_not_found'], status=404)

    form = PasswordResetForm(formdata=json_formdata(get_json_payload()))
    if not form.validate():
        return form_error(form)

    update_password(user_id, form.password.data)
    current_app.logger.info(f'Password of user {user_id} reset by {current_user.email}')
    return api_success(message=MESSAGES['password_updated'])


@admin_bp.route('/users/<int:user_id>', methods=['DELETE'])
@admin_required
def users_delete(user_id):
    """Delete a user; owned restaurants are kept without an owner."""
    can_delete, error_msg = can_delete_user(user_id, current_user.id)
    if not can_delete:
        status = 404 if error_msg == MESSAGES['user_not_found'] else 400
        return api_error(error_msg, status=status)

    delete_user(user_id)
    current_app.logger.info(f'User {user_id} deleted by {current_user.email}')
    return api_success(message=MESSAGES['user_deleted'])
