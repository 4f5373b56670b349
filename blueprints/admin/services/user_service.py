"""
Business rules for account administration.
"""

from models.user import get_user_by_email, get_user_by_id
from utils.messages import MESSAGES
from utils.validators import validate_email, validate_password


def validate_user_creation(email: str, password: str) -> tuple:
    """
    Validate user creation data.

    Args:
        email: Email to check
        password: Password to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not validate_email(email):
        return False, MESSAGES['invalid_email']

    if get_user_by_email(email):
        return False, MESSAGES['user_exists']

    is_valid, error = validate_password(password)
    if not is_valid:
        return False, error

    return True, ''


def can_delete_user(user_id: int, current_user_id: int) -> tuple:
    """
    Check if user can be deleted.

    Args:
        user_id: User ID to delete
        current_user_id: Current logged-in user ID

    Returns:
        Tuple of (can_delete, error_message)
    """
    if user_id == current_user_id:
        return False, MESSAGES['cannot_delete_self']

    if not get_user_by_id(user_id):
        return False, MESSAGES['user_not_found']

    return True, ''
