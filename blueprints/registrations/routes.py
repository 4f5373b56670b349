"""
Restaurant registration routes.
Restaurateurs sign up their restaurant; it stays hidden until an administrator approves it.
"""

import sqlite3

from flask import Blueprint, current_app
from flask_login import login_required, login_user, current_user

from blueprints.registrations.forms import RestaurantRegistrationForm, RegistrationWithAccountForm
from extensions import limiter, AUTH_RATE_LIMIT
from models.registration import (
    cuisine_to_string, create_registration, get_registration_by_id,
    get_all_registrations, get_registrations_by_user
)
from models.restaurant import create_restaurant, get_restaurant_by_id
from models.user import User, create_user, get_user_by_email, get_user_by_id, update_user, to_public
from utils.api_response import api_success, api_error, form_error
from utils.helpers import get_json_payload, json_formdata, as_list
from utils.messages import MESSAGES

registrations_bp = Blueprint('registrations', __name__)


def _pending_restaurant(form, payload: dict, owner_id: int) -> dict:
    """Restaurant columns for a freshly registered (pending) restaurant."""
    postal_code, city = form.postal_code.data, form.city.data
    return {
        'name': form.restaurant_name.data.strip(),
        'cuisine': cuisine_to_string(payload.get('cuisine_type')),
        'location': f'{postal_code} {city}' if postal_code and city else form.address.data,
        'price_range': form.price_range.data,
        'image': form.logo_url.data,
        'description': form.description.data or '',
        'photos': as_list(payload.get('photos')),
        'owner_id': owner_id,
        'phone': form.phone.data,
        'address': form.address.data,
        'menu_pdf_url': form.menu_pdf_url.data,
        'company_name': form.company_name.data,
        'registration_number': form.registration_number.data,
        'approval_status': 'pending',
    }


@registrations_bp.route('/with-account', methods=['POST'])
@limiter.limit(AUTH_RATE_LIMIT)
def register_with_account():
    """
    Create a restaurateur account and its pending restaurant, then log in.

    Request body:
        email, password, first_name, last_name, restaurant_name, address, phone,
        company_name, registration_number, postal_code, city, cuisine_type
        (string or list), price_range, description, logo_url, photos, menu_pdf_url
    """
    payload = get_json_payload()
    form = RegistrationWithAccountForm(formdata=json_formdata(payload))
    if not form.validate():
        return form_error(form)
    if not as_list(payload.get('cuisine_type')):
        return api_error(MESSAGES['missing_registration_info'])

    if get_user_by_email(form.email.data):
        return api_error(MESSAGES['email_exists'])

    try:
        user_id = create_user(
            email=form.email.data,
            password=form.password.data,
            first_name=form.first_name.data,
            last_name=form.last_name.data,
            user_type='restaurateur'
        )
    except sqlite3.IntegrityError:
        return api_error(MESSAGES['email_exists'])

    restaurant_id = create_restaurant(_pending_restaurant(form, payload, user_id))

    user_dict = get_user_by_id(user_id)
    login_user(User(user_dict))
    current_app.logger.info(f'Restaurateur registered: {user_dict["email"]} (restaurant {restaurant_id})')

    return api_success(
        data={'user': to_public(user_dict), 'restaurant': get_restaurant_by_id(restaurant_id)},
        message=MESSAGES['register_success'],
        status=201
    )


@registrations_bp.route('', methods=['POST'])
@login_required
def register_restaurant():
    """Register a pending restaurant owned by the current user."""
    payload = get_json_payload()
    required = ('restaurant_name', 'address', 'phone', 'cuisine_type', 'price_range')
    if any(not payload.get(field) for field in required):
        return api_error(MESSAGES['missing_registration_info'])

    form = RestaurantRegistrationForm(formdata=json_formdata(payload))
    if not form.validate():
        return form_error(form)

    restaurant_id = create_restaurant(_pending_restaurant(form, payload, current_user.id))
    if current_user.is_client:
        update_user(current_user.id, user_type='restaurateur')

    current_app.logger.info(f'Restaurant {restaurant_id} registered by user {current_user.id}')
    return api_success(
        data=get_restaurant_by_id(restaurant_id),
        message=MESSAGES['registration_received'],
        status=201
    )


@registrations_bp.route('/request', methods=['POST'])
@login_required
def file_request():
    """
    File a registration request for administrator review.

    Request body:
        restaurant_name, address, phone, company_name, cuisine_type, price_range
        (required); registration_number, description, opening_hours, logo_url,
        photos, menu_pdf_url
    """
    try:
        registration_id = create_registration(current_user.id, get_json_payload())
    except ValueError as error:
        return api_error(str(error))

    return api_success(
        data=get_registration_by_id(registration_id),
        message=MESSAGES['registration_received'],
        status=201
    )


@registrations_bp.route('')
@login_required
def list_registrations():
    """Administrators see every request, other users their own."""
    if current_user.is_admin:
        return api_success(data=get_all_registrations())
    return api_success(data=get_registrations_by_user(current_user.id))
