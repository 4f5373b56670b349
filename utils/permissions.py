"""
Restaurant access checks.
Resolves what a logged-in user may do on a given restaurant.
"""

from flask import g
from flask_login import current_user

from database import get_db

ROLE_ADMIN = 'admin'
ROLE_OWNER = 'owner'


def get_restaurant_role(user, restaurant: dict) -> str | None:
    """
    Get the user's role on a restaurant.

    Args:
        user: User object (Flask-Login)
        restaurant: Restaurant dict

    Returns:
        'owner', the team role ('staff', 'manager', ...), 'admin', or None
    """
    if not user or not user.is_authenticated or not restaurant:
        return None

    if restaurant.get('owner_id') == user.id:
        return ROLE_OWNER

    db = get_db()
    row = db.execute('''
        SELECT role FROM restaurant_users
        WHERE restaurant_id = ? AND user_id = ?
    ''', (restaurant['id'], user.id)).fetchone()
    if row:
        return row['role']

    if user.is_admin:
        return ROLE_ADMIN

    return None


def can_access_restaurant(restaurant: dict, user=None) -> bool:
    """
    Check dashboard access (owner, team member or admin).

    Args:
        restaurant: Restaurant dict
        user: User object (defaults to current_user)

    Returns:
        True if access is granted
    """
    user = user or current_user
    role = get_restaurant_role(user, restaurant)
    if role:
        g.restaurant_role = role
    return role is not None


def can_manage_restaurant(restaurant: dict, user=None) -> bool:
    """
    Check management rights (owner or admin): settings, team, claims.

    Args:
        restaurant: Restaurant dict
        user: User object (defaults to current_user)

    Returns:
        True if the user owns the restaurant or is an administrator
    """
    user = user or current_user
    if not user or not user.is_authenticated or not restaurant:
        return False
    return restaurant.get('owner_id') == user.id or bool(user.is_admin)
