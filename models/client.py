"""
Restaurant client data access functions.
Clients are built from booking contact details and aggregated from booking history.
"""

from database import get_db
from utils.helpers import load_json, dump_json, as_list
from utils.validators import normalize_email, normalize_phone

# Bookings with these statuses do not count as visits
NON_VISIT_STATUSES = ('cancelled', 'noshow')
SEARCH_MAX_LENGTH = 100


def _row_to_client(row) -> dict:
    client = dict(row)
    client['tags'] = load_json(client.get('tags'), [])
    return client


def _visit_stats(bookings: list) -> dict:
    """Compute visit_count, last_visit and avg_guests from bookings sorted newest first."""
    visits = [b for b in bookings if b['status'] not in NON_VISIT_STATUSES]
    visit_count = len(visits)
    return {
        'visit_count': visit_count,
        'last_visit': visits[0]['date'] if visits else None,
        'avg_guests': round(sum(b['guests'] for b in visits) / visit_count) if visit_count else 0,
    }


# =============================================================================
# READ OPERATIONS
# =============================================================================

def get_client_by_id(client_id: int) -> dict:
    """
    Get client by ID.

    Args:
        client_id: Client ID

    Returns:
        Client dict or None if not found
    """
    db = get_db()
    row = db.execute('SELECT * FROM clients WHERE id = ?', (client_id,)).fetchone()
    return _row_to_client(row) if row else None


def get_client_by_email(restaurant_id: int, email: str) -> dict:
    """Get the most recently updated client of a restaurant with this email."""
    db = get_db()
    row = db.execute('''
        SELECT * FROM clients
        WHERE restaurant_id = ? AND LOWER(email) = ?
        ORDER BY updated_at DESC, id DESC
        LIMIT 1
    ''', (restaurant_id, normalize_email(email))).fetchone()
    return _row_to_client(row) if row else None


def get_clients_with_stats(restaurant_id: int, search: str = None) -> list:
    """
    Get a restaurant's clients with visit statistics.

    Clients sharing an email are collapsed into the most recently updated
    one. Statistics ignore cancelled and no-show bookings.

    Args:
        restaurant_id: Restaurant ID
        search: Optional text matched against names, email and phone

    Returns:
        List of client dicts with visit_count, last_visit and avg_guests
    """
    db = get_db()
    query = 'SELECT * FROM clients WHERE restaurant_id = ?'
    params = [restaurant_id]

    if search:
        term = f'%{search[:SEARCH_MAX_LENGTH].lower()}%'
        query += '''
            AND (LOWER(first_name) LIKE ? OR LOWER(last_name) LIKE ?
                 OR LOWER(email) LIKE ? OR phone LIKE ?)
        '''
        params.extend([term] * 4)

    query += ' ORDER BY updated_at DESC, id DESC'
    rows = db.execute(query, params).fetchall()

    # Clients without an email (phone-only dashboard bookings) stay separate
    unique_clients = {}
    for row in rows:
        key = row['email'].lower() if row['email'] else f'id:{row["id"]}'
        if key not in unique_clients:
            unique_clients[key] = _row_to_client(row)

    if not unique_clients:
        return []

    booking_rows = db.execute('''
        SELECT LOWER(email) AS email_key, phone, date, guests, status
        FROM bookings
        WHERE restaurant_id = ?
        ORDER BY date DESC, time DESC
    ''', (restaurant_id,)).fetchall()

    bookings_by_email = {}
    bookings_by_phone = {}
    for booking in booking_rows:
        if booking['email_key']:
            bookings_by_email.setdefault(booking['email_key'], []).append(booking)
        elif booking['phone']:
            bookings_by_phone.setdefault(normalize_phone(booking['phone']), []).append(booking)

    clients = []
    for key, client in unique_clients.items():
        if client['email']:
            bookings = bookings_by_email.get(key, [])
        else:
            bookings = bookings_by_phone.get(normalize_phone(client['phone']), [])
        client.update(_visit_stats(bookings))
        clients.append(client)
    return clients


def get_client_bookings(client: dict) -> list:
    """
    Get bookings made at the client's restaurant with the client's email,
    or with the client's phone when the client has no email.

    Returns:
        List of booking dicts, newest date first
    """
    db = get_db()
    if client.get('email'):
        rows = db.execute('''
            SELECT * FROM bookings
            WHERE restaurant_id = ? AND LOWER(email) = ?
            ORDER BY date DESC, time DESC
        ''', (client['restaurant_id'], normalize_email(client['email']))).fetchall()
        return [dict(row) for row in rows]

    phone = normalize_phone(client.get('phone'))
    if not phone:
        return []
    rows = db.execute('''
        SELECT * FROM bookings
        WHERE restaurant_id = ? AND email = '' AND REPLACE(phone, ' ', '') = ?
        ORDER BY date DESC, time DESC
    ''', (client['restaurant_id'], phone)).fetchall()
    return [dict(row) for row in rows]


def get_client_with_details(client_id: int) -> dict:
    """
    Get client with bookings and aggregates.

    Returns:
        Client dict with bookings, visit_count, avg_guests and total_spent,
        or None if not found
    """
    client = get_client_by_id(client_id)
    if not client:
        return None

    bookings = get_client_bookings(client) if client.get('restaurant_id') else []
    client.update(_visit_stats(bookings))
    client['total_spent'] = round(sum(
        b['bill_amount'] or 0 for b in bookings if b['status'] not in NON_VISIT_STATUSES
    ), 2)
    client['bookings'] = bookings
    return client


def get_all_clients_with_stats() -> list:
    """
    Get every client with platform-wide booking aggregates (admin view).

    Returns:
        List of client dicts with total_bookings, restaurant_count and
        last_booking_date
    """
    db = get_db()
    rows = db.execute('''
        SELECT c.*,
               (SELECT COUNT(*) FROM bookings b
                WHERE LOWER(b.email) = LOWER(c.email)) AS total_bookings,
               (SELECT COUNT(DISTINCT b.restaurant_id) FROM bookings b
                WHERE LOWER(b.email) = LOWER(c.email)) AS restaurant_count,
               (SELECT MAX(b.created_at) FROM bookings b
                WHERE LOWER(b.email) = LOWER(c.email)) AS last_booking_date
        FROM clients c
        ORDER BY c.created_at DESC, c.id DESC
    ''').fetchall()
    return [_row_to_client(row) for row in rows]


# =============================================================================
# WRITE OPERATIONS
# =============================================================================

def upsert_client_from_booking(restaurant_id: int, first_name: str, last_name: str,
                               email: str, phone: str) -> dict:
    """
    Create or refresh the client record behind a booking.

    Matching order: phone (spaces ignored) within the restaurant, then
    email + first name + last name (case-insensitive).

    Args:
        restaurant_id: Restaurant ID
        first_name: Guest first name
        last_name: Guest last name
        email: Guest email
        phone: Guest phone

    Returns:
        The client dict
    """
    db = get_db()
    cursor = db.cursor()
    email = normalize_email(email)
    phone = (phone or '').strip()
    compact_phone = normalize_phone(phone)

    existing = None
    if compact_phone:
        existing = cursor.execute('''
            SELECT * FROM clients
            WHERE restaurant_id = ? AND REPLACE(phone, ' ', '') = ?
        ''', (restaurant_id, compact_phone)).fetchone()

    if not existing and email:
        existing = cursor.execute('''
            SELECT * FROM clients
            WHERE restaurant_id = ? AND LOWER(email) = ?
              AND LOWER(first_name) = ? AND LOWER(last_name) = ?
        ''', (restaurant_id, email, first_name.strip().lower(), last_name.strip().lower())).fetchone()

    if existing:
        cursor.execute('''
            UPDATE clients
            SET phone = ?, email = ?, first_name = ?, last_name = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (phone or existing['phone'], email or existing['email'],
              first_name or existing['first_name'], last_name or existing['last_name'],
              existing['id']))
        client_id = existing['id']
    else:
        cursor.execute('''
            INSERT INTO clients (restaurant_id, first_name, last_name, email, phone)
            VALUES (?, ?, ?, ?, ?)
        ''', (restaurant_id, first_name, last_name, email, phone))
        client_id = cursor.lastrowid

    db.commit()
    return get_client_by_id(client_id)


def update_client(client_id: int, **kwargs) -> bool:
    """
    Update client notes and tags.

    Args:
        client_id: Client ID
        **kwargs: notes, tags

    Returns:
        True if updated
    """
    updates = []
    values = []

    if 'notes' in kwargs:
        updates.append('notes = ?')
        values.append(kwargs['notes'])
    if 'tags' in kwargs:
        updates.append('tags = ?')
        values.append(dump_json(as_list(kwargs['tags'])))

    if not updates:
        return False

    updates.append('updated_at = CURRENT_TIMESTAMP')
    values.append(client_id)

    db = get_db()
    cursor = db.execute(f'UPDATE clients SET {", ".join(updates)} WHERE id = ?', values)
    db.commit()
    return cursor.rowcount > 0


def record_client_spending(restaurant_id: int, email: str, amount: float) -> bool:
    """
    Add a settled bill to the client's totals.

    Args:
        restaurant_id: Restaurant ID
        email: Guest email from the booking
        amount: Bill amount

    Returns:
        True if a client was updated
    """
    client = get_client_by_email(restaurant_id, email)
    if not client:
        return False

    db = get_db()
    db.execute('''
        UPDATE clients
        SET total_spent = COALESCE(total_spent, 0) + ?,
            visit_count = COALESCE(visit_count, 0) + 1,
            updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (amount, client['id']))
    db.commit()
    return True
