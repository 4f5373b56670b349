"""
Input validation helper functions.
Provides validation for common input types.
"""

import math
import re
from datetime import datetime


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email or not isinstance(email, str):
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_phone(phone: str) -> bool:
    """
    Validate an international phone number.
    Accepts: +41 79 123 45 67, 0041791234567, 079 123 45 67

    Args:
        phone: Phone number to validate

    Returns:
        True if valid phone format
    """
    if not phone or not isinstance(phone, str):
        return False

    # Remove spaces and common separators
    cleaned = re.sub(r'[\s\-\(\)\.]', '', phone)

    return bool(re.match(r'^(\+|00)?[0-9]{8,15}$', cleaned))


def normalize_phone(phone: str) -> str:
    """Strip whitespace from a phone number for matching."""
    if not phone:
        return ''
    return re.sub(r'\s+', '', phone).strip()


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address."""
    if not email:
        return ''
    return email.strip().lower()


def validate_password(password: str, min_length: int = 6) -> tuple:
    """
    Validate password strength.

    Args:
        password: Password to validate
        min_length: Minimum password length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, 'Le mot de passe est requis'

    if len(password) < min_length:
        return False, f'Le mot de passe doit contenir au moins {min_length} caractères'

    return True, ''


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is in YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    try:
        datetime.strptime(date_str, '%Y-%m-%d')
        return len(date_str) == 10
    except (ValueError, TypeError):
        return False


def validate_time_format(time_str: str) -> bool:
    """
    Validate time is in zero-padded HH:MM format.

    Args:
        time_str: Time string to validate

    Returns:
        True if valid format
    """
    if not isinstance(time_str, str):
        return False
    return bool(re.match(r'^([01][0-9]|2[0-3]):[0-5][0-9]$', time_str))


def parse_month(month_str: str) -> tuple | None:
    """
    Parse a YYYY-MM month string.

    Args:
        month_str: Month string

    Returns:
        Tuple of (year, month) or None if invalid
    """
    if not isinstance(month_str, str) or not re.match(r'^\d{4}-\d{2}$', month_str):
        return None
    year, month = (int(part) for part in month_str.split('-'))
    if not 1 <= month <= 12:
        return None
    return year, month


def parse_amount(value) -> float | None:
    """
    Parse a non-negative monetary amount.

    Args:
        value: Raw value (number or numeric string)

    Returns:
        Float amount, or None when empty or invalid
    """
    if value is None or value == '' or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return amount


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    # Strip whitespace
    sanitized = str(text).strip()

    # Limit length if specified
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
