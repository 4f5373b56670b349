"""
Restaurant registration request data access functions.
Registration requests are reviewed by administrators; approval creates the restaurant.
"""

from database import get_db
from models.restaurant import validate_opening_hours
from utils.helpers import load_json, dump_json, as_list

REGISTRATION_STATUSES = ('pending', 'approved', 'rejected')


def _row_to_registration(row) -> dict:
    registration = dict(row)
    registration['cuisine_type'] = load_json(registration.get('cuisine_type'), [])
    registration['photos'] = load_json(registration.get('photos'), [])
    registration['opening_hours'] = load_json(registration.get('opening_hours'), None)
    return registration


def cuisine_to_string(cuisine_type) -> str:
    """Join a cuisine list into the restaurant's comma separated cuisine."""
    return ', '.join(as_list(cuisine_type))


def get_all_registrations() -> list:
    """
    Get all registration requests with the requesting user's email.

    Returns:
        List of registration dicts, newest first
    """
    db = get_db()
    rows = db.execute('''
        SELECT rr.*, u.email AS user_email
        FROM restaurant_registrations rr
        LEFT JOIN users u ON rr.user_id = u.id
        ORDER BY rr.created_at DESC, rr.id DESC
    ''').fetchall()
    return [_row_to_registration(row) for row in rows]


def get_registrations_by_user(user_id: int) -> list:
    """Get the registration requests filed by a user."""
    db = get_db()
    rows = db.execute('''
        SELECT * FROM restaurant_registrations
        WHERE user_id = ?
        ORDER BY created_at DESC, id DESC
    ''', (user_id,)).fetchall()
    return [_row_to_registration(row) for row in rows]


def get_registration_by_id(registration_id: int) -> dict:
    """
    Get registration by ID.

    Returns:
        Registration dict or None if not found
    """
    db = get_db()
    row = db.execute('SELECT * FROM restaurant_registrations WHERE id = ?',
                     (registration_id,)).fetchone()
    return _row_to_registration(row) if row else None


def create_registration(user_id: int, data: dict) -> int:
    """
    File a registration request.

    Args:
        user_id: Requesting user ID
        data: restaurant_name, address, phone, company_name, cuisine_type and
            price_range are required; registration_number, description,
            opening_hours, logo_url, photos, menu_pdf_url are optional

    Returns:
        New registration ID

    Raises:
        ValueError: If required information is missing or the opening hours are malformed
    """
    required = ('restaurant_name', 'address', 'phone', 'company_name', 'cuisine_type', 'price_range')
    if any(not data.get(field) for field in required):
        raise ValueError('Informations requises manquantes')
    opening_hours = validate_opening_hours(data.get('opening_hours'))

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO restaurant_registrations (
            user_id, restaurant_name, address, phone, company_name, registration_number,
            cuisine_type, price_range, description, opening_hours, logo_url, photos, menu_pdf_url
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    ''', (
        user_id,
        data['restaurant_name'],
        data['address'],
        data['phone'],
        data['company_name'],
        data.get('registration_number'),
        dump_json(as_list(data['cuisine_type'])),
        data['price_range'],
        data.get('description'),
        dump_json(opening_hours),
        data.get('logo_url'),
        dump_json(as_list(data.get('photos'))),
        data.get('menu_pdf_url'),
    ))
    db.commit()
    return cursor.lastrowid


def update_registration_status(registration_id: int, status: str, admin_notes: str = None) -> dict:
    """
    Set the review status of a registration.

    Args:
        registration_id: Registration ID
        status: 'pending', 'approved' or 'rejected'
        admin_notes: Optional reviewer notes

    Returns:
        Updated registration dict, or None if not found

    Raises:
        ValueError: If the status is invalid
    """
    if status not in REGISTRATION_STATUSES:
        raise ValueError('Statut invalide')

    db = get_db()
    cursor = db.execute('''
        UPDATE restaurant_registrations
        SET status = ?, admin_notes = COALESCE(?, admin_notes), updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (status, admin_notes, registration_id))
    db.commit()

    if cursor.rowcount == 0:
        return None
    return get_registration_by_id(registration_id)


def registration_to_restaurant(registration: dict) -> dict:
    """
    Map an approved registration onto restaurant columns.

    Args:
        registration: Registration dict

    Returns:
        Data suitable for models.restaurant.create_restaurant
    """
    return {
        'name': registration['restaurant_name'],
        'cuisine': cuisine_to_string(registration.get('cuisine_type')),
        'location': registration['address'],
        'price_range': registration['price_range'],
        'image': registration.get('logo_url'),
        'description': registration.get('description') or '',
        'photos': registration.get('photos') or [],
        'owner_id': registration.get('user_id'),
        'phone': registration.get('phone'),
        'address': registration.get('address'),
        'opening_hours': registration.get('opening_hours'),
        'menu_pdf_url': registration.get('menu_pdf_url'),
        'company_name': registration.get('company_name'),
        'registration_number': registration.get('registration_number'),
        'approval_status': 'approved',
    }
