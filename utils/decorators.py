"""
Route decorators for authentication and authorization.
Provides admin and per-restaurant access control for API routes.
"""

from functools import wraps
from flask import g
from flask_login import login_required, current_user

from utils.api_response import api_error
from utils.messages import MESSAGES
from utils.permissions import can_access_restaurant, can_manage_restaurant


def admin_required(func):
    """
    Decorator to require an administrator account.

    Usage:
        @admin_bp.route('/users')
        @admin_required
        def list_users():
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return api_error(MESSAGES['unauthorized'], status=401)
        if not current_user.is_admin:
            return api_error(MESSAGES['admin_required'], status=403)
        return func(*args, **kwargs)
    return wrapper


def _restaurant_guard(check, arg_name: str):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            from models.restaurant import get_restaurant_by_id

            if not current_user.is_authenticated:
                return api_error(MESSAGES['unauthorized'], status=401)

            restaurant = get_restaurant_by_id(kwargs.get(arg_name))
            if not restaurant:
                return api_error(MESSAGES['restaurant_not_found'], status=404)

            if not check(restaurant):
                return api_error(MESSAGES['restaurant_forbidden'], status=403)

            g.restaurant = restaurant
            return func(*args, **kwargs)
        return wrapper
    return decorator


def restaurant_access_required(arg_name: str = 'restaurant_id'):
    """
    Decorator to require dashboard access to the restaurant in the URL.

    The restaurant is loaded into g.restaurant.

    Usage:
        @bp.route('/restaurant/<int:restaurant_id>')
        @restaurant_access_required()
        def list_for_restaurant(restaurant_id):
            ...

    Args:
        arg_name: Name of the URL argument holding the restaurant ID
    """
    return _restaurant_guard(can_access_restaurant, arg_name)


def restaurant_owner_required(arg_name: str = 'restaurant_id'):
    """
    Decorator to require ownership (or admin) of the restaurant in the URL.

    Args:
        arg_name: Name of the URL argument holding the restaurant ID
    """
    return _restaurant_guard(can_manage_restaurant, arg_name)


# Re-export login_required for convenience
__all__ = ['login_required', 'admin_required', 'restaurant_access_required', 'restaurant_owner_required']
