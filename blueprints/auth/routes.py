"""
Authentication routes: register, login, logout, current user.
Session-based authentication for the single-page front end.
"""

import sqlite3

from flask import Blueprint, current_app, redirect, request
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from blueprints.auth.forms import LoginForm, RegisterForm
from extensions import limiter, AUTH_RATE_LIMIT
from models.user import (
    User, create_user, get_user_by_email, get_user_by_id, update_last_login,
    check_password, to_public
)
from utils.api_response import api_success, api_error, form_error
from utils.helpers import get_json_payload, json_formdata
from utils.messages import MESSAGES
from utils.validators import validate_email

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
@limiter.limit(AUTH_RATE_LIMIT)
def register():
    """
    Create an account and open a session.

    Request body:
        email, password (>= 6 chars), first_name, last_name (optional)
    """
    form = RegisterForm(formdata=json_formdata(get_json_payload()))
    if not form.validate():
        return form_error(form)

    if get_user_by_email(form.email.data):
        return api_error(MESSAGES['email_exists'])

    try:
        user_id = create_user(
            email=form.email.data,
            password=form.password.data,
            first_name=form.first_name.data,
            last_name=form.last_name.data
        )
    except sqlite3.IntegrityError:
        return api_error(MESSAGES['email_exists'])

    user_dict = get_user_by_id(user_id)
    login_user(User(user_dict))
    current_app.logger.info(f'User registered: {user_dict["email"]}')

    return api_success(data=to_public(user_dict), message=MESSAGES['register_success'], status=201)


@auth_bp.route('/check-email')
@limiter.limit(AUTH_RATE_LIMIT)
def check_email():
    """Report whether an account exists for ?email=."""
    email = request.args.get('email', '').strip()
    if not validate_email(email):
        return api_error(MESSAGES['invalid_email'])

    return api_success(data={'exists': get_user_by_email(email) is not None})


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(AUTH_RATE_LIMIT)
def login():
    """
    Log in with email and password.

    Request body:
        email, password, remember_me (optional)
    """
    form = LoginForm(formdata=json_formdata(get_json_payload()))
    if not form.validate():
        return form_error(form)

    user_dict = get_user_by_email(form.email.data)

    if user_dict is None or not check_password(user_dict, form.password.data):
        current_app.logger.warning(f'Failed login for {form.email.data}')
        return api_error(MESSAGES['invalid_credentials'], status=401)

    user = User(user_dict)
    login_user(user, remember=form.remember_me.data)
    update_last_login(user.id)

    return api_success(
        data=to_public(get_user_by_id(user.id)),
        message=MESSAGES['login_success'].format(name=user.display_name)
    )


@auth_bp.route('/user')
@login_required
def current_user_info():
    """Get the logged-in user."""
    user_dict = get_user_by_id(current_user.id)
    if not user_dict:
        return api_error(MESSAGES['user_not_found'], status=404)
    return api_success(data=to_public(user_dict))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Close the session."""
    logout_user()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/csrf-token')
def csrf_token():
    """Issue a CSRF token for the X-CSRFToken header."""
    return api_success(data={'csrf_token': generate_csrf()})


def logout_redirect():
    """GET /api/logout: close the session and go back to the home page."""
    logout_user()
    return redirect('/')
