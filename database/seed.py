"""
Database seed data.
Initial data population for fresh database installations.
"""

from flask import current_app
from werkzeug.security import generate_password_hash

CUISINE_CATEGORIES = [
    ('Italien', '\U0001F35D'),
    ('Français', '\U0001F950'),
    ('Suisse', '\U0001F9C0'),
    ('Japonais', '\U0001F371'),
    ('Chinois', '\U0001F961'),
    ('Indien', '\U0001F35B'),
    ('Burgers', '\U0001F354'),
    ('Pizza', '\U0001F355'),
    ('Sushi', '\U0001F363'),
    ('Végétalien', '\U0001F957'),
    ('Brunch', '\U0001F95E'),
    ('Romantique', '\U0001F495'),
    ('Oriental', '\U0001F959'),
    ('Festif', '\U0001F389'),
    ('Du monde', '\U0001F30D'),
]


def seed_database(db):
    """Insert initial seed data."""
    seed_cuisine_categories(db)
    seed_default_admin(db)


def seed_cuisine_categories(db):
    """Insert cuisine categories when the table is empty."""
    existing = db.execute('SELECT COUNT(*) FROM cuisine_categories').fetchone()[0]
    if existing:
        return

    for name, icon in CUISINE_CATEGORIES:
        db.execute('INSERT INTO cuisine_categories (name, icon) VALUES (?, ?)', (name, icon))


def seed_default_admin(db):
    """Create the administrator configured by ADMIN_EMAIL / ADMIN_PASSWORD."""
    email = current_app.config.get('ADMIN_EMAIL')
    password = current_app.config.get('ADMIN_PASSWORD')
    if not email or not password:
        return

    email = email.strip().lower()
    row = db.execute('SELECT id FROM users WHERE email = ?', (email,)).fetchone()
    if row:
        return

    db.execute('''
        INSERT INTO users (email, password_hash, first_name, last_name, is_admin, user_type)
        VALUES (?, ?, 'Admin', 'User', 1, 'admin')
    ''', (email, generate_password_hash(password)))
    current_app.logger.info('Default admin created: %s', email)
