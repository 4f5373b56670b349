"""
User model and data access functions.
Handles user authentication, CRUD operations, and Flask-Login integration.
"""

from werkzeug.security import generate_password_hash, check_password_hash
from database import get_db

PUBLIC_FIELDS = (
    'id', 'email', 'first_name', 'last_name', 'profile_image_url',
    'is_admin', 'user_type', 'created_at', 'updated_at', 'last_login'
)


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        """
        Initialize User from database row.

        Args:
            user_dict: Dictionary with user data from database
        """
        self.id = user_dict['id']
        self.email = user_dict['email']
        self.first_name = user_dict.get('first_name')
        self.last_name = user_dict.get('last_name')
        self.is_admin = bool(user_dict.get('is_admin'))
        self.user_type = user_dict.get('user_type') or 'client'

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    @property
    def is_client(self):
        """Plain diner account without restaurant access."""
        return self.user_type == 'client' and not self.is_admin

    @property
    def display_name(self):
        """First and last name, falling back to the email."""
        name = ' '.join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email

    def get_id(self):
        """Required by Flask-Login. Returns user ID as unicode string."""
        return str(self.id)


def to_public(user_dict: dict) -> dict:
    """Strip the password hash and other private columns from a user dict."""
    if not user_dict:
        return None
    return {key: user_dict.get(key) for key in PUBLIC_FIELDS}


def get_user_by_id(user_id: int) -> dict:
    """
    Get user by ID.

    Args:
        user_id: User ID

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users WHERE id = ?', (user_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_user_by_email(email: str) -> dict:
    """
    Get user by email (case-insensitive).

    Args:
        email: Email to search for

    Returns:
        User dict or None if not found
    """
    if not email:
        return None
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users WHERE email = ?', (email.strip().lower(),))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_all_users() -> list:
    """
    Get all users (without password hashes).

    Returns:
        List of user dicts, newest first
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users ORDER BY created_at DESC, id DESC')
    return [to_public(dict(row)) for row in cursor.fetchall()]


def create_user(email: str, password: str, first_name: str = None, last_name: str = None,
                is_admin: bool = False, user_type: str = 'client') -> int:
    """
    Create new user with hashed password.

    Args:
        email: Unique email (stored lower-cased)
        password: Plain text password (will be hashed)
        first_name: User's first name
        last_name: User's last name
        is_admin: Grant administrator rights
        user_type: 'client', 'restaurateur' or 'admin'

    Returns:
        New user ID

    Raises:
        sqlite3.IntegrityError if email already exists
    """
    db = get_db()
    password_hash = generate_password_hash(password)

    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO users (email, password_hash, first_name, last_name, is_admin, user_type)
        VALUES (?, ?, ?, ?, ?, ?)
    ''', (email.strip().lower(), password_hash, first_name or None, last_name or None,
          1 if is_admin else 0, user_type))

    db.commit()
    return cursor.lastrowid


def update_user(user_id: int, **kwargs) -> bool:
    """
    Update user fields.

    Args:
        user_id: User ID to update
        **kwargs: Fields to update (first_name, last_name, profile_image_url, is_admin, user_type)

    Returns:
        True if updated successfully
    """
    db = get_db()

    # Build dynamic update query
    allowed_fields = ['first_name', 'last_name', 'profile_image_url', 'is_admin', 'user_type']
    updates = []
    values = []

    for field in allowed_fields:
        if field in kwargs:
            value = kwargs[field]
            if field == 'is_admin':
                value = 1 if value else 0
            updates.append(f'{field} = ?')
            values.append(value)

    if not updates:
        return False

    # Add updated_at timestamp
    updates.append('updated_at = CURRENT_TIMESTAMP')
    values.append(user_id)

    query = f'UPDATE users SET {", ".join(updates)} WHERE id = ?'

    cursor = db.cursor()
    cursor.execute(query, values)
    db.commit()

    return cursor.rowcount > 0


def update_password(user_id: int, new_password: str) -> bool:
    """
    Update user password.

    Args:
        user_id: User ID
        new_password: New plain text password (will be hashed)

    Returns:
        True if updated successfully
    """
    db = get_db()
    password_hash = generate_password_hash(new_password)

    cursor = db.cursor()
    cursor.execute('''
        UPDATE users
        SET password_hash = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (password_hash, user_id))

    db.commit()
    return cursor.rowcount > 0


def delete_user(user_id: int) -> bool:
    """
    Delete a user account.

    Registrations and team memberships are removed; restaurants the user
    owned are kept without an owner.

    Args:
        user_id: User ID to delete

    Returns:
        True if deleted successfully
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('DELETE FROM restaurant_registrations WHERE user_id = ?', (user_id,))
    cursor.execute('DELETE FROM restaurant_users WHERE user_id = ?', (user_id,))
    cursor.execute('UPDATE restaurants SET owner_id = NULL WHERE owner_id = ?', (user_id,))
    cursor.execute('DELETE FROM notification_reads WHERE user_id = ?', (user_id,))
    cursor.execute('DELETE FROM users WHERE id = ?', (user_id,))

    db.commit()
    return cursor.rowcount > 0


def update_last_login(user_id: int) -> None:
    """
    Update last login timestamp.

    Args:
        user_id: User ID
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        UPDATE users SET last_login = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (user_id,))
    db.commit()


def check_password(user_dict: dict, password: str) -> bool:
    """
    Verify password against stored hash.

    Args:
        user_dict: User dictionary with password_hash
        password: Plain text password to check

    Returns:
        True if password matches
    """
    if not user_dict or not user_dict.get('password_hash'):
        return False
    return check_password_hash(user_dict['password_hash'], password)
