"""
Booking CRUD operations.
Handles create, read and the service-time updates of bookings.
"""

import sqlite3

from database import get_db
from utils.helpers import generate_token

BOOKING_STATUSES = ('pending', 'confirmed', 'waiting', 'refused', 'cancelled', 'noshow')

# Bookings that hold seats in a slot
ACTIVE_STATUSES = ('pending', 'confirmed')

OWNER_CREATED_IP = 'owner-created'
CANCEL_TOKEN_LENGTH = 32


def _row_to_booking(row) -> dict:
    booking = dict(row)
    booking['newsletter'] = bool(booking.get('newsletter'))
    booking['bill_requested'] = bool(booking.get('bill_requested'))
    return booking


# =============================================================================
# CREATE
# =============================================================================

def create_booking(
    restaurant_id: int,
    date: str,
    time: str,
    guests: int,
    first_name: str,
    last_name: str,
    email: str = '',
    phone: str = '',
    children: int = 0,
    special_request: str = None,
    newsletter: bool = False,
    client_ip: str = None,
    client_id: str = None,
    status: str = 'confirmed',
    table_id: str = None,
    zone_id: str = None,
    max_retries: int = 3
) -> dict:
    """
    Create a booking with a unique cancel token.

    Args:
        restaurant_id: Restaurant ID
        date: Booking date 'YYYY-MM-DD'
        time: Booking time 'HH:MM'
        guests: Number of adults
        first_name: Guest first name
        last_name: Guest last name
        email: Guest email
        phone: Guest phone
        children: Number of children
        special_request: Free-text request
        newsletter: Newsletter opt-in
        client_ip: Originating IP, or 'owner-created' for dashboard bookings
        client_id: Anonymous device identifier
        status: Initial status
        table_id: Optional floor-plan table
        zone_id: Optional floor-plan zone
        max_retries: Attempts when a generated token collides

    Returns:
        The created booking dict

    Raises:
        ValueError: If the status is invalid
    """
    if status not in BOOKING_STATUSES:
        raise ValueError('Statut invalide')

    db = get_db()
    cursor = db.cursor()

    for attempt in range(max_retries):
        try:
            cursor.execute('''
                INSERT INTO bookings (
                    restaurant_id, date, time, guests, children, first_name, last_name,
                    email, phone, special_request, newsletter, client_ip, client_id,
                    status, table_id, zone_id, cancel_token
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                restaurant_id, date, time, guests, children or 0, first_name, last_name,
                email or '', phone or '', special_request or None, 1 if newsletter else 0,
                client_ip, client_id, status, table_id or None, zone_id or None,
                generate_token(CANCEL_TOKEN_LENGTH)
            ))
            break
        except sqlite3.IntegrityError:
            if attempt == max_retries - 1:
                raise

    db.commit()
    return get_booking_by_id(cursor.lastrowid)


# =============================================================================
# READ
# =============================================================================

def get_booking_by_id(booking_id: int) -> dict:
    """
    Get booking by ID.

    Args:
        booking_id: Booking ID

    Returns:
        Booking dict or None if not found
    """
    db = get_db()
    row = db.execute('SELECT * FROM bookings WHERE id = ?', (booking_id,)).fetchone()
    return _row_to_booking(row) if row else None


def get_booking_by_token(cancel_token: str) -> dict:
    """
    Get booking by its cancel token.

    Args:
        cancel_token: Token sent in guest and restaurant e-mails

    Returns:
        Booking dict or None if not found
    """
    if not cancel_token:
        return None
    db = get_db()
    row = db.execute('SELECT * FROM bookings WHERE cancel_token = ?', (cancel_token,)).fetchone()
    return _row_to_booking(row) if row else None


# =============================================================================
# UPDATE
# =============================================================================

def _update_booking(booking_id: int, assignments: str, values: tuple) -> dict:
    db = get_db()
    cursor = db.execute(f'UPDATE bookings SET {assignments} WHERE id = ?', (*values, booking_id))
    db.commit()
    if cursor.rowcount == 0:
        return None
    return get_booking_by_id(booking_id)


def update_booking_status(booking_id: int, status: str) -> dict:
    """
    Change the status of a booking.

    Args:
        booking_id: Booking ID
        status: New status

    Returns:
        Updated booking dict, or None if not found

    Raises:
        ValueError: If the status is invalid
    """
    if status not in BOOKING_STATUSES:
        raise ValueError('Statut invalide')
    return _update_booking(booking_id, 'status = ?', (status,))


def mark_arrival(booking_id: int, arrival_time: str) -> dict:
    """Record the guest's arrival time."""
    return _update_booking(booking_id, 'arrival_time = ?', (arrival_time,))


def mark_bill_requested(booking_id: int, requested: bool = True) -> dict:
    """Flag that the table asked for the bill."""
    return _update_booking(booking_id, 'bill_requested = ?', (1 if requested else 0,))


def mark_departure(booking_id: int, departure_time: str, bill_amount: float = None) -> dict:
    """
    Record the guest's departure and optionally the bill.

    Args:
        booking_id: Booking ID
        departure_time: 'HH:MM'
        bill_amount: Settled amount (kept unchanged when None)

    Returns:
        Updated booking dict, or None if not found
    """
    if bill_amount is None:
        return _update_booking(booking_id, 'departure_time = ?', (departure_time,))
    return _update_booking(
        booking_id, 'departure_time = ?, bill_amount = ?', (departure_time, bill_amount)
    )


def assign_table(booking_id: int, table_id: str = None, zone_id: str = None) -> dict:
    """Assign (or clear) the floor-plan table of a booking."""
    return _update_booking(
        booking_id, 'table_id = ?, zone_id = ?', (table_id or None, zone_id or None)
    )
