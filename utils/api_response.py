"""
Standardized API response helpers.

Provides consistent JSON response format across all API endpoints:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "Message d'erreur"}
    Warning:  {"success": true, "data": {...}, "warning": "..."}

Usage:
    from utils.api_response import api_success, api_error

    return api_success(data=booking, message='Réservation créée', status=201)
    return api_error('Restaurant introuvable', status=404)
"""

from flask import jsonify
from typing import Any


def api_success(
    data: Any = None,
    message: str | None = None,
    warning: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional payload (dict or list) to include as 'data' key.
        message: Optional success message (French).
        warning: Optional warning message (French).
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields to include in the response
            (e.g., unread_count, pending_count).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if warning:
        response['warning'] = warning

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Error message (French).
        status: HTTP status code (default 400).
        **extra_fields: Additional top-level fields (e.g., field errors).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def form_error(form, status: int = 400) -> tuple:
    """
    Build an error response from a failed WTForms validation.

    The first field error becomes the 'error' message; the full mapping is
    returned under 'errors'.

    Args:
        form: Validated form instance with errors
        status: HTTP status code (default 400)

    Returns:
        Tuple of (Response, status_code)
    """
    message = 'Données invalides'
    for field_name, errors in form.errors.items():
        if errors:
            message = errors[0] if isinstance(errors[0], str) else f'{field_name}: données invalides'
            break

    return api_error(message, status=status, errors=form.errors)
