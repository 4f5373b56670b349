"""
Miscellaneous utility helper functions.
Provides common functionality used across the application.
"""

import json
import os
import secrets
import time
import uuid
from datetime import datetime

from flask import request
from werkzeug.datastructures import MultiDict


def format_date(date_str: str, format_str: str = '%d.%m.%Y') -> str:
    """
    Format date string to Swiss format.

    Args:
        date_str: Date string (YYYY-MM-DD)
        format_str: Output format (default: DD.MM.YYYY)

    Returns:
        Formatted date string or original if invalid
    """
    try:
        date_obj = datetime.strptime(date_str, '%Y-%m-%d')
        return date_obj.strftime(format_str)
    except (ValueError, TypeError):
        return date_str or ''


def generate_token(length: int = 32) -> str:
    """
    Generate a URL-safe random token (booking cancel links).

    Args:
        length: Number of characters

    Returns:
        Token string of exactly `length` characters
    """
    return secrets.token_urlsafe(length)[:length]


def generate_client_id() -> str:
    """Generate the anonymous device identifier stored in the client cookie."""
    return f'client_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}'


def get_client_ip() -> str:
    """
    Get the originating client IP of the current request.

    Uses the first X-Forwarded-For entry when present (reverse proxy),
    otherwise the socket address.

    Returns:
        IP address string or 'unknown'
    """
    forwarded = request.headers.get('X-Forwarded-For', '')
    ip = forwarded or request.remote_addr or 'unknown'
    return ip.split(',')[0].strip()


def load_json(value, default=None):
    """
    Decode a JSON column value.

    Args:
        value: Stored TEXT value (or already-decoded object)
        default: Value returned for NULL or malformed content

    Returns:
        Decoded Python object
    """
    if value is None or value == '':
        return default
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return default


def dump_json(value) -> str | None:
    """Encode a Python object for a JSON column (None stays NULL)."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def as_list(value) -> list:
    """Coerce a string or iterable into a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    return [str(item) for item in value]


def get_file_extension(filename: str) -> str:
    """
    Get file extension from filename.

    Args:
        filename: Filename

    Returns:
        Extension without dot (lowercase)
    """
    if not filename:
        return ''

    return os.path.splitext(filename)[1][1:].lower()


def allowed_file(filename: str, allowed_extensions: set) -> bool:
    """
    Check if file extension is allowed.

    Args:
        filename: Filename to check
        allowed_extensions: Set of allowed extensions

    Returns:
        True if extension is allowed
    """
    return get_file_extension(filename) in allowed_extensions


def random_filename(filename: str) -> str:
    """
    Build a random storage name keeping the original extension.

    Args:
        filename: Original filename

    Returns:
        '<uuid4>.<ext>' (no extension if the original had none)
    """
    ext = get_file_extension(filename)
    return f'{uuid.uuid4()}.{ext}' if ext else str(uuid.uuid4())


def get_json_payload() -> dict:
    """Get the JSON body of the current request as a dict (empty when absent)."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_formdata(payload: dict) -> MultiDict:
    """
    Convert a JSON body into form data for WTForms validation.

    Scalars become strings, booleans 'true'/'false', None values are
    dropped and nested structures are left to the caller.

    Args:
        payload: Decoded JSON body

    Returns:
        MultiDict suitable as `formdata` of a FlaskForm
    """
    formdata = MultiDict()
    for key, value in (payload or {}).items():
        if value is None or isinstance(value, (dict, list)):
            continue
        if isinstance(value, bool):
            formdata[key] = 'true' if value else 'false'
        else:
            formdata[key] = str(value)
    return formdata
