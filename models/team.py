"""
Restaurant team data access functions.
Team members get dashboard access to a restaurant with a role.
"""

from database import get_db
from models.user import get_user_by_email, create_user

DEFAULT_ROLE = 'staff'


def get_team_members(restaurant_id: int) -> list:
    """
    Get team members of a restaurant.

    Args:
        restaurant_id: Restaurant ID

    Returns:
        List of member dicts with the linked user's names
    """
    db = get_db()
    rows = db.execute('''
        SELECT ru.*, u.first_name, u.last_name
        FROM restaurant_users ru
        LEFT JOIN users u ON ru.user_id = u.id
        WHERE ru.restaurant_id = ?
        ORDER BY ru.invited_at, ru.id
    ''', (restaurant_id,)).fetchall()
    return [dict(row) for row in rows]


def get_team_member(restaurant_id: int, user_id: int) -> dict:
    """Get the membership of a user on a restaurant, or None."""
    db = get_db()
    row = db.execute('''
        SELECT * FROM restaurant_users
        WHERE restaurant_id = ? AND user_id = ?
    ''', (restaurant_id, user_id)).fetchone()
    return dict(row) if row else None


def add_team_member(restaurant_id: int, email: str, password: str,
                    role: str = DEFAULT_ROLE, first_name: str = None, last_name: str = None) -> dict:
    """
    Add a team member, creating the user account when missing.

    Args:
        restaurant_id: Restaurant ID
        email: Member email
        password: Password for a newly created account
        role: Team role (default 'staff')
        first_name: Optional first name for a new account
        last_name: Optional last name for a new account

    Returns:
        The new membership dict

    Raises:
        ValueError: If the user is already a member
    """
    email = email.strip().lower()
    user = get_user_by_email(email)
    if user:
        user_id = user['id']
    else:
        user_id = create_user(email, password, first_name, last_name, user_type='restaurateur')

    if get_team_member(restaurant_id, user_id):
        raise ValueError('Cet utilisateur fait déjà partie de l\'équipe')

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO restaurant_users (restaurant_id, user_id, email, role, accepted_at)
        VALUES (?, ?, ?, ?, CURRENT_TIMESTAMP)
    ''', (restaurant_id, user_id, email, role or DEFAULT_ROLE))
    db.commit()

    row = db.execute('SELECT * FROM restaurant_users WHERE id = ?', (cursor.lastrowid,)).fetchone()
    return dict(row)


def remove_team_member(restaurant_id: int, user_id: int) -> bool:
    """
    Remove a user from a restaurant's team (other restaurants untouched).

    Returns:
        True if a membership was removed
    """
    db = get_db()
    cursor = db.execute('''
        DELETE FROM restaurant_users
        WHERE restaurant_id = ? AND user_id = ?
    ''', (restaurant_id, user_id))
    db.commit()
    return cursor.rowcount > 0
