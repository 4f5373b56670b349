"""
Closed day data access functions.
A closed day blocks bookings for a whole date or for one service.
"""

import sqlite3

from database import get_db
from utils.opening_hours import SERVICES


def get_closed_days(restaurant_id: int) -> list:
    """
    Get all closed days of a restaurant.

    Args:
        restaurant_id: Restaurant ID

    Returns:
        List of closed day dicts ordered by date
    """
    db = get_db()
    rows = db.execute('''
        SELECT * FROM closed_days
        WHERE restaurant_id = ?
        ORDER BY date, service
    ''', (restaurant_id,)).fetchall()
    return [dict(row) for row in rows]


def get_closed_days_for_date(restaurant_id: int, date: str) -> list:
    """Get the closed-day entries of a restaurant on one date."""
    db = get_db()
    rows = db.execute('''
        SELECT * FROM closed_days
        WHERE restaurant_id = ? AND date = ?
    ''', (restaurant_id, date)).fetchall()
    return [dict(row) for row in rows]


def get_closed_day_by_id(closed_day_id: int) -> dict:
    """
    Get closed day by ID.

    Returns:
        Closed day dict or None if not found
    """
    db = get_db()
    row = db.execute('SELECT * FROM closed_days WHERE id = ?', (closed_day_id,)).fetchone()
    return dict(row) if row else None


def create_closed_day(restaurant_id: int, date: str, service: str = 'all', reason: str = None) -> int:
    """
    Create a closed day.

    Args:
        restaurant_id: Restaurant ID
        date: Date 'YYYY-MM-DD'
        service: 'all', 'lunch' or 'dinner'
        reason: Optional reason shown to staff

    Returns:
        New closed day ID

    Raises:
        ValueError: If the service is invalid or the entry already exists
    """
    service = service or 'all'
    if service not in SERVICES:
        raise ValueError('Service invalide')

    db = get_db()
    cursor = db.cursor()
    try:
        cursor.execute('''
            INSERT INTO closed_days (restaurant_id, date, service, reason)
            VALUES (?, ?, ?, ?)
        ''', (restaurant_id, date, service, reason or None))
    except sqlite3.IntegrityError:
        raise ValueError('Ce jour est déjà marqué comme fermé')
    db.commit()
    return cursor.lastrowid


def delete_closed_day(closed_day_id: int) -> bool:
    """
    Delete a closed day.

    Returns:
        True if deleted
    """
    db = get_db()
    cursor = db.execute('DELETE FROM closed_days WHERE id = ?', (closed_day_id,))
    db.commit()
    return cursor.rowcount > 0
