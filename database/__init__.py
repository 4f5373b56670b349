"""
SQLite storage for restaurants, bookings and their owners.

- connection: request-scoped connection (get_db, close_db) and init_db
- schema: tables, constraints and indexes
- seed: administrator account and cuisine categories
"""

from database.connection import get_db, close_db, init_db

__all__ = ['get_db', 'close_db', 'init_db']
