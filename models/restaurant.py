"""
Restaurant data access functions.
Handles restaurant CRUD, public visibility, approval workflow and ownership.
"""

from flask import current_app

from database import get_db
from utils.helpers import load_json, dump_json, as_list
from utils.opening_hours import DAY_NAMES
from utils.validators import validate_time_format

APPROVAL_STATUSES = ('pending', 'approved', 'rejected')

JSON_LIST_FIELDS = ('features', 'photos', 'payment_methods', 'spoken_languages')
BOOLEAN_FIELDS = ('is_blocked', 'has_vegetarian_options', 'ask_bill_amount')
INTEGER_FIELDS = ('capacity', 'online_capacity', 'min_guests', 'max_guests')

# Fields an owner may change from the dashboard
OWNER_UPDATABLE_FIELDS = (
    'name', 'description', 'image', 'photos', 'features', 'cuisine', 'location',
    'price_range', 'opening_hours', 'capacity', 'online_capacity', 'min_guests', 'max_guests',
    'phone', 'address', 'menu_pdf_url', 'public_email', 'preferred_language', 'website',
    'executive_chef', 'public_transport', 'nearby_parking', 'additional_info',
    'payment_methods', 'has_vegetarian_options', 'spoken_languages', 'ask_bill_amount',
    'company_name', 'registration_number',
)

# Additional fields only set by the system or administrators
SYSTEM_FIELDS = ('owner_id', 'approval_status', 'is_blocked', 'google_place_id', 'rating')

REQUIRED_FIELDS = ('name', 'cuisine', 'location', 'price_range')


# =============================================================================
# SERIALIZATION
# =============================================================================

def row_to_restaurant(row) -> dict:
    """
    Convert a restaurants row into an API dict, decoding JSON columns.

    Args:
        row: sqlite3.Row or dict

    Returns:
        Restaurant dict or None
    """
    if row is None:
        return None
    restaurant = dict(row)
    for field in JSON_LIST_FIELDS:
        if field in restaurant:
            restaurant[field] = load_json(restaurant[field], [])
    if 'opening_hours' in restaurant:
        restaurant['opening_hours'] = load_json(restaurant['opening_hours'], None)
    return restaurant


def validate_opening_hours(opening_hours) -> dict | None:
    """
    Validate an opening hours document.

    Args:
        opening_hours: Dict keyed by French weekday names, or None

    Returns:
        The validated document

    Raises:
        ValueError: If the document is malformed
    """
    if opening_hours is None:
        return None
    if not isinstance(opening_hours, dict):
        raise ValueError('Horaires d\'ouverture invalides')

    for day, hours in opening_hours.items():
        if day not in DAY_NAMES or not isinstance(hours, dict):
            raise ValueError(f'Horaires d\'ouverture invalides pour {day}')
        if not hours.get('isOpen'):
            continue
        services = [('openTime1', 'closeTime1')]
        if hours.get('hasSecondService'):
            services.append(('openTime2', 'closeTime2'))
        for open_key, close_key in services:
            open_time, close_time = hours.get(open_key), hours.get(close_key)
            if not validate_time_format(open_time) or not validate_time_format(close_time):
                raise ValueError(f'Horaires d\'ouverture invalides pour {day}')
            # A close time earlier than the open time closes after midnight
            if open_time == close_time:
                raise ValueError(f'L\'heure de fermeture doit suivre l\'ouverture ({day})')

    return opening_hours


def _coerce(field: str, value):
    """Convert an API value into its column representation."""
    if field in JSON_LIST_FIELDS:
        return dump_json(as_list(value))
    if field == 'opening_hours':
        return dump_json(validate_opening_hours(value))
    if field in BOOLEAN_FIELDS:
        return 1 if value else 0
    if field in INTEGER_FIELDS:
        if value is None or value == '':
            if field == 'online_capacity':
                return None
            raise ValueError(f'Valeur invalide pour {field}')
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ValueError(f'Valeur invalide pour {field}')
        if number < (0 if field == 'online_capacity' else 1):
            raise ValueError(f'Valeur invalide pour {field}')
        return number
    if field == 'rating':
        return float(value or 0)
    if field == 'approval_status' and value not in APPROVAL_STATUSES:
        raise ValueError('Statut invalide')
    return value


# =============================================================================
# READ
# =============================================================================

def get_restaurant_by_id(restaurant_id: int) -> dict:
    """
    Get restaurant by ID regardless of approval status.

    Args:
        restaurant_id: Restaurant ID

    Returns:
        Restaurant dict or None if not found
    """
    if restaurant_id is None:
        return None
    db = get_db()
    row = db.execute('SELECT * FROM restaurants WHERE id = ?', (restaurant_id,)).fetchone()
    return row_to_restaurant(row)


def is_publicly_visible(restaurant: dict) -> bool:
    """Approved and not blocked restaurants are listed and bookable."""
    return bool(
        restaurant
        and restaurant.get('approval_status') == 'approved'
        and not restaurant.get('is_blocked')
    )


def get_public_restaurants(cuisine: str = None, search: str = None) -> list:
    """
    Get restaurants visible to the public.

    Args:
        cuisine: Optional cuisine filter (substring, case-insensitive)
        search: Optional search over name, location and description

    Returns:
        List of restaurant dicts ordered by rating then name
    """
    db = get_db()
    query = '''
        SELECT * FROM restaurants
        WHERE approval_status = 'approved' AND is_blocked = 0
    '''
    params = []

    if cuisine:
        query += ' AND LOWER(cuisine) LIKE ?'
        params.append(f'%{cuisine.lower()}%')

    if search:
        query += ' AND (LOWER(name) LIKE ? OR LOWER(location) LIKE ? OR LOWER(description) LIKE ?)'
        term = f'%{search.lower()}%'
        params.extend([term] * 3)

    query += ' ORDER BY rating DESC, name'

    rows = db.execute(query, params).fetchall()
    return [row_to_restaurant(row) for row in rows]


def get_public_restaurant(restaurant_id: int) -> dict:
    """
    Get a restaurant only if it is publicly visible.

    Args:
        restaurant_id: Restaurant ID

    Returns:
        Restaurant dict or None
    """
    restaurant = get_restaurant_by_id(restaurant_id)
    return restaurant if is_publicly_visible(restaurant) else None


def get_all_restaurants_admin() -> list:
    """
    Get every restaurant with its owner's email (admin view).

    Returns:
        List of restaurant dicts with 'owner_email'
    """
    db = get_db()
    rows = db.execute('''
        SELECT r.*, u.email AS owner_email
        FROM restaurants r
        LEFT JOIN users u ON r.owner_id = u.id
        ORDER BY r.created_at DESC, r.id DESC
    ''').fetchall()
    return [row_to_restaurant(row) for row in rows]


def get_restaurants_for_user(user_id: int) -> list:
    """
    Get restaurants a user owns or belongs to as a team member.

    Args:
        user_id: User ID

    Returns:
        List of restaurant dicts with 'access_role' ('owner' or the team role)
    """
    db = get_db()
    rows = db.execute('''
        SELECT r.*, 'owner' AS access_role
        FROM restaurants r
        WHERE r.owner_id = ?
        UNION
        SELECT r.*, ru.role AS access_role
        FROM restaurants r
        JOIN restaurant_users ru ON ru.restaurant_id = r.id
        WHERE ru.user_id = ? AND (r.owner_id IS NULL OR r.owner_id != ?)
        ORDER BY name
    ''', (user_id, user_id, user_id)).fetchall()
    return [row_to_restaurant(row) for row in rows]


def get_effective_capacity(restaurant: dict, online: bool = False) -> int:
    """
    Get the capacity used for booking decisions.

    Args:
        restaurant: Restaurant dict
        online: Use the online capacity (falls back to total capacity)

    Returns:
        Number of covers
    """
    capacity = restaurant.get('capacity') or current_app.config.get('DEFAULT_CAPACITY', 40)
    if online and restaurant.get('online_capacity') is not None:
        return restaurant['online_capacity']
    return capacity


# =============================================================================
# CREATE / UPDATE / DELETE
# =============================================================================

def create_restaurant(data: dict) -> int:
    """
    Create a restaurant.

    Args:
        data: Column values; name, cuisine, location and price_range are required

    Returns:
        New restaurant ID

    Raises:
        ValueError: If a required field is missing or a value is invalid
    """
    for field in REQUIRED_FIELDS:
        if not data.get(field):
            raise ValueError(f'Le champ {field} est requis')

    values = {
        'image': data.get('image') or current_app.config['DEFAULT_RESTAURANT_IMAGE'],
        'description': data.get('description') or '',
        'features': [],
        'rating': 0,
        'approval_status': 'pending',
    }
    for field in OWNER_UPDATABLE_FIELDS + SYSTEM_FIELDS:
        if field in data and data[field] is not None:
            values[field] = data[field]

    columns = list(values.keys())
    params = [_coerce(field, values[field]) for field in columns]

    db = get_db()
    cursor = db.cursor()
    cursor.execute(
        f'INSERT INTO restaurants ({", ".join(columns)}) VALUES ({", ".join("?" for _ in columns)})',
        params
    )
    db.commit()
    return cursor.lastrowid


def update_restaurant(restaurant_id: int, data: dict, allowed_fields=OWNER_UPDATABLE_FIELDS) -> list:
    """
    Update restaurant fields.

    Args:
        restaurant_id: Restaurant ID
        data: Values keyed by column name; unknown keys are ignored
        allowed_fields: Whitelist of updatable columns

    Returns:
        List of updated field names (empty if nothing applicable)

    Raises:
        ValueError: If a value is invalid
    """
    updates = []
    values = []
    updated_fields = []

    for field in allowed_fields:
        if field in data:
            updates.append(f'{field} = ?')
            values.append(_coerce(field, data[field]))
            updated_fields.append(field)

    if not updates:
        return []

    min_guests = data.get('min_guests')
    max_guests = data.get('max_guests')
    if min_guests is not None and max_guests is not None and int(min_guests) > int(max_guests):
        raise ValueError('Le minimum de personnes dépasse le maximum')

    values.append(restaurant_id)
    db = get_db()
    db.execute(f'UPDATE restaurants SET {", ".join(updates)} WHERE id = ?', values)
    db.commit()
    return updated_fields


def set_approval_status(restaurant_id: int, status: str) -> bool:
    """
    Set the approval status of a restaurant.

    Args:
        restaurant_id: Restaurant ID
        status: 'pending', 'approved' or 'rejected'

    Returns:
        True if a restaurant was updated
    """
    if status not in APPROVAL_STATUSES:
        raise ValueError('Statut invalide')
    db = get_db()
    cursor = db.execute('UPDATE restaurants SET approval_status = ? WHERE id = ?', (status, restaurant_id))
    db.commit()
    return cursor.rowcount > 0


def set_blocked(restaurant_id: int, blocked: bool = True) -> bool:
    """Block or unblock a restaurant from public listing."""
    db = get_db()
    cursor = db.execute('UPDATE restaurants SET is_blocked = ? WHERE id = ?',
                        (1 if blocked else 0, restaurant_id))
    db.commit()
    return cursor.rowcount > 0


def claim_restaurant(restaurant_id: int, user_id: int) -> bool:
    """
    Assign an unowned restaurant to a user.

    Returns:
        True if claimed, False if it already had an owner
    """
    db = get_db()
    cursor = db.execute('''
        UPDATE restaurants SET owner_id = ?
        WHERE id = ? AND owner_id IS NULL
    ''', (user_id, restaurant_id))
    db.commit()
    return cursor.rowcount > 0


def delete_restaurant(restaurant_id: int) -> bool:
    """
    Delete a restaurant and its dependent rows.

    Bookings, closed days, floor plan and team memberships are deleted;
    clients are kept but detached from the restaurant.

    Args:
        restaurant_id: Restaurant ID

    Returns:
        True if deleted
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        DELETE FROM notification_reads
        WHERE booking_id IN (SELECT id FROM bookings WHERE restaurant_id = ?)
    ''', (restaurant_id,))
    cursor.execute('DELETE FROM bookings WHERE restaurant_id = ?', (restaurant_id,))
    cursor.execute('DELETE FROM closed_days WHERE restaurant_id = ?', (restaurant_id,))
    cursor.execute('DELETE FROM floor_plans WHERE restaurant_id = ?', (restaurant_id,))
    cursor.execute('DELETE FROM restaurant_users WHERE restaurant_id = ?', (restaurant_id,))
    cursor.execute('UPDATE clients SET restaurant_id = NULL WHERE restaurant_id = ?', (restaurant_id,))
    cursor.execute('DELETE FROM restaurants WHERE id = ?', (restaurant_id,))
    db.commit()
    return cursor.rowcount > 0


# =============================================================================
# CUISINE CATEGORIES
# =============================================================================

def get_cuisine_categories() -> list:
    """
    Get all cuisine categories.

    Returns:
        List of category dicts ordered by ID
    """
    db = get_db()
    rows = db.execute('SELECT * FROM cuisine_categories ORDER BY id').fetchall()
    return [dict(row) for row in rows]
