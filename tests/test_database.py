"""
Database tests.
Tests database initialization and data integrity.
"""

import sqlite3

import pytest

from conftest import ADMIN_EMAIL


def test_database_tables(app):
    """Test that all required tables exist."""
    from database import get_db

    with app.app_context():
        db = get_db()
        tables = [row[0] for row in db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        ).fetchall()]

    required_tables = [
        'users', 'cuisine_categories', 'restaurant_registrations', 'restaurants',
        'bookings', 'clients', 'closed_days', 'floor_plans', 'restaurant_users',
        'notification_reads'
    ]
    for table in required_tables:
        assert table in tables, f"Table {table} should exist"


def test_seed_data(app):
    """Test that seed data was created correctly."""
    from database import get_db

    with app.app_context():
        db = get_db()
        admin = db.execute('SELECT is_admin, user_type FROM users WHERE email = ?', (ADMIN_EMAIL,)).fetchone()
        category_count = db.execute('SELECT COUNT(*) FROM cuisine_categories').fetchone()[0]

    assert admin is not None, "Admin user should exist"
    assert admin['is_admin'] == 1
    assert admin['user_type'] == 'admin'
    assert category_count == 15


def test_init_db_resets_data(app, restaurant):
    """Re-initializing drops existing rows and re-seeds."""
    from database import get_db, init_db

    with app.app_context():
        init_db()
        db = get_db()
        assert db.execute('SELECT COUNT(*) FROM restaurants').fetchone()[0] == 0
        assert db.execute('SELECT COUNT(*) FROM users').fetchone()[0] == 1


def test_unique_cancel_token(app, restaurant):
    """Two bookings can never share a cancel token."""
    from database import get_db
    from models.booking import create_booking

    with app.app_context():
        booking = create_booking(restaurant['id'], '2026-12-01', '19:00', 2, 'A', 'B')
        db = get_db()
        with pytest.raises(sqlite3.IntegrityError):
            db.execute('''
                INSERT INTO bookings (restaurant_id, date, time, guests, first_name, last_name, email, phone, cancel_token)
                VALUES (?, '2026-12-01', '20:00', 2, 'C', 'D', '', '', ?)
            ''', (restaurant['id'], booking['cancel_token']))


def test_unique_closed_day_per_service(app, restaurant):
    """A date can be closed once per service."""
    from models.closed_day import create_closed_day

    with app.app_context():
        create_closed_day(restaurant['id'], '2026-12-25', 'all')
        create_closed_day(restaurant['id'], '2026-12-25', 'lunch')
        with pytest.raises(ValueError):
            create_closed_day(restaurant['id'], '2026-12-25', 'all')
