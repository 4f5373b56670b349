"""
Booking query operations.
Slot occupancy, anti-fraud lookups, dashboard listings and notifications.
"""

from database import get_db
from .booking_crud import ACTIVE_STATUSES, OWNER_CREATED_IP, _row_to_booking

# Bookings that no longer expect the guest
CLOSED_STATUSES = ('cancelled', 'noshow')


def _placeholders(values) -> str:
    return ', '.join('?' for _ in values)


# =============================================================================
# SLOT OCCUPANCY
# =============================================================================

def get_booked_guests_for_slot(restaurant_id: int, date: str, time: str) -> int:
    """
    Count the seats held in a slot.

    Adults and children of pending and confirmed bookings are counted.

    Args:
        restaurant_id: Restaurant ID
        date: Date 'YYYY-MM-DD'
        time: Time 'HH:MM'

    Returns:
        Number of seats
    """
    db = get_db()
    row = db.execute(f'''
        SELECT COALESCE(SUM(guests + COALESCE(children, 0)), 0) AS total
        FROM bookings
        WHERE restaurant_id = ? AND date = ? AND time = ?
          AND status IN ({_placeholders(ACTIVE_STATUSES)})
    ''', (restaurant_id, date, time, *ACTIVE_STATUSES)).fetchone()
    return row['total']


# =============================================================================
# ANTI-FRAUD
# =============================================================================

def find_email_mismatch_by_ip(client_ip: str, email: str) -> dict:
    """
    Find a booking made from the same IP with another email in the last 24 hours.

    Returns:
        Booking dict or None
    """
    db = get_db()
    row = db.execute('''
        SELECT * FROM bookings
        WHERE client_ip = ? AND LOWER(email) != LOWER(?)
          AND created_at >= datetime('now', '-1 day')
        LIMIT 1
    ''', (client_ip, email)).fetchone()
    return _row_to_booking(row) if row else None


def find_email_mismatch_by_client_id(client_id: str, email: str) -> dict:
    """
    Find a booking made from the same device cookie with another email in the last 24 hours.

    Returns:
        Booking dict or None
    """
    if not client_id:
        return None
    db = get_db()
    row = db.execute('''
        SELECT * FROM bookings
        WHERE client_id = ? AND LOWER(email) != LOWER(?)
          AND created_at >= datetime('now', '-1 day')
        LIMIT 1
    ''', (client_id, email)).fetchone()
    return _row_to_booking(row) if row else None


def find_existing_booking(client_ip: str, date: str, time: str) -> dict:
    """
    Find a booking from the same IP on the same date and time.

    Returns:
        Booking dict or None
    """
    db = get_db()
    row = db.execute('''
        SELECT * FROM bookings
        WHERE client_ip = ? AND date = ? AND time = ?
        LIMIT 1
    ''', (client_ip, date, time)).fetchone()
    return _row_to_booking(row) if row else None


# =============================================================================
# LISTINGS
# =============================================================================

def get_bookings_by_restaurant(restaurant_id: int, date: str = None, month: tuple = None,
                               status: str = None) -> list:
    """
    Get bookings of a restaurant for the dashboard.

    Args:
        restaurant_id: Restaurant ID
        date: Optional exact date 'YYYY-MM-DD'
        month: Optional (year, month) tuple
        status: Optional status filter

    Returns:
        List of booking dicts ordered by date and time
    """
    db = get_db()
    query = 'SELECT * FROM bookings WHERE restaurant_id = ?'
    params = [restaurant_id]

    if date:
        query += ' AND date = ?'
        params.append(date)

    if month:
        query += ' AND date LIKE ?'
        params.append(f'{month[0]:04d}-{month[1]:02d}-%')

    if status:
        query += ' AND status = ?'
        params.append(status)

    query += ' ORDER BY date DESC, time ASC, id ASC'

    rows = db.execute(query, params).fetchall()
    return [_row_to_booking(row) for row in rows]


def get_bookings_for_month(restaurant_ids: list, year: int, month: int) -> list:
    """
    Get bookings of several restaurants for one month.

    Args:
        restaurant_ids: Restaurant IDs
        year: Year
        month: Month (1-12)

    Returns:
        List of booking dicts
    """
    if not restaurant_ids:
        return []
    db = get_db()
    rows = db.execute(f'''
        SELECT * FROM bookings
        WHERE restaurant_id IN ({_placeholders(restaurant_ids)})
          AND date LIKE ?
        ORDER BY date, time
    ''', (*restaurant_ids, f'{year:04d}-{month:02d}-%')).fetchall()
    return [_row_to_booking(row) for row in rows]


def get_bookings_for_date(date: str) -> list:
    """
    Get every booking of a date still expecting the guest (reminders).

    Args:
        date: Date 'YYYY-MM-DD'

    Returns:
        List of booking dicts with an email address
    """
    db = get_db()
    rows = db.execute(f'''
        SELECT * FROM bookings
        WHERE date = ? AND status NOT IN ({_placeholders(CLOSED_STATUSES)})
          AND email != ''
        ORDER BY restaurant_id, time
    ''', (date, *CLOSED_STATUSES)).fetchall()
    return [_row_to_booking(row) for row in rows]


# =============================================================================
# NOTIFICATIONS
# =============================================================================

def get_notifications(user_id: int, restaurant_ids: list, unread_only: bool = False,
                      limit: int = 100) -> dict:
    """
    Get booking notifications for a user's restaurants.

    Only bookings made on the public platform are notifications; a
    cancelled booking is a 'cancellation', anything else a 'new_booking'.

    Args:
        user_id: User reading the notifications
        restaurant_ids: Restaurants to include
        unread_only: Only return unread notifications
        limit: Maximum number of notifications returned

    Returns:
        Dict with 'notifications', 'unread_count' and 'pending_count'
    """
    empty = {'notifications': [], 'unread_count': 0, 'pending_count': 0}
    if not restaurant_ids:
        return empty

    db = get_db()
    rows = db.execute(f'''
        SELECT b.*, r.name AS restaurant_name,
               CASE WHEN nr.id IS NULL THEN 0 ELSE 1 END AS is_read
        FROM bookings b
        JOIN restaurants r ON r.id = b.restaurant_id
        LEFT JOIN notification_reads nr ON nr.booking_id = b.id AND nr.user_id = ?
        WHERE b.restaurant_id IN ({_placeholders(restaurant_ids)})
          AND (b.client_ip IS NULL OR b.client_ip != ?)
        ORDER BY b.created_at DESC, b.id DESC
    ''', (user_id, *restaurant_ids, OWNER_CREATED_IP)).fetchall()

    notifications = []
    unread_count = 0
    pending_count = 0

    for row in rows:
        booking = _row_to_booking(row)
        booking['read'] = bool(booking.pop('is_read'))
        booking['type'] = 'cancellation' if booking['status'] == 'cancelled' else 'new_booking'

        if not booking['read']:
            unread_count += 1
        if booking['status'] == 'pending':
            pending_count += 1

        if unread_only and booking['read']:
            continue
        notifications.append(booking)

    return {
        'notifications': notifications[:limit],
        'unread_count': unread_count,
        'pending_count': pending_count,
    }


def mark_notifications_read(user_id: int, restaurant_ids: list, booking_ids: list = None) -> int:
    """
    Mark notifications as read.

    Args:
        user_id: User ID
        restaurant_ids: Restaurants the user can access
        booking_ids: Bookings to mark, or None for all of them

    Returns:
        Number of notifications newly marked as read
    """
    if not restaurant_ids:
        return 0

    db = get_db()
    query = f'''
        INSERT OR IGNORE INTO notification_reads (user_id, booking_id)
        SELECT ?, id FROM bookings
        WHERE restaurant_id IN ({_placeholders(restaurant_ids)})
          AND (client_ip IS NULL OR client_ip != ?)
    '''
    params = [user_id, *restaurant_ids, OWNER_CREATED_IP]

    if booking_ids is not None:
        if not booking_ids:
            return 0
        query += f' AND id IN ({_placeholders(booking_ids)})'
        params.extend(booking_ids)

    cursor = db.execute(query, params)
    db.commit()
    return cursor.rowcount
