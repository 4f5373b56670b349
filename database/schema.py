"""
Database schema definitions.
Table creation, indexes, and structure management.

JSON-valued columns (arrays, opening hours, floor plans) are stored as TEXT
holding a JSON document and decoded by the model layer.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'notification_reads',
        'restaurant_users',
        'floor_plans',
        'closed_days',
        'clients',
        'bookings',
        'restaurant_registrations',
        'restaurants',
        'cuisine_categories',
        'users'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Users
    db.execute('''
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT,
            first_name TEXT,
            last_name TEXT,
            profile_image_url TEXT,
            is_admin INTEGER DEFAULT 0,
            user_type TEXT DEFAULT 'client',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            last_login TIMESTAMP
        )
    ''')

    # 2. Catalogue
    db.execute('''
        CREATE TABLE cuisine_categories (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT UNIQUE NOT NULL,
            icon TEXT
        )
    ''')

    # 3. Restaurants
    db.execute('''
        CREATE TABLE restaurant_registrations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER REFERENCES users(id),
            restaurant_name TEXT NOT NULL,
            address TEXT NOT NULL,
            phone TEXT NOT NULL,
            company_name TEXT NOT NULL,
            registration_number TEXT,
            cuisine_type TEXT NOT NULL DEFAULT '[]',
            price_range TEXT NOT NULL,
            description TEXT,
            opening_hours TEXT,
            logo_url TEXT,
            photos TEXT DEFAULT '[]',
            menu_pdf_url TEXT,
            status TEXT NOT NULL DEFAULT 'pending',
            admin_notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE restaurants (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            cuisine TEXT NOT NULL,
            location TEXT NOT NULL,
            rating REAL NOT NULL DEFAULT 0,
            price_range TEXT NOT NULL,
            image TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            features TEXT NOT NULL DEFAULT '[]',
            photos TEXT DEFAULT '[]',
            owner_id INTEGER REFERENCES users(id),
            phone TEXT,
            address TEXT,
            opening_hours TEXT,
            menu_pdf_url TEXT,
            google_place_id TEXT,
            public_email TEXT,
            preferred_language TEXT DEFAULT 'fr',
            website TEXT,
            capacity INTEGER DEFAULT 40,
            online_capacity INTEGER,
            min_guests INTEGER DEFAULT 1,
            max_guests INTEGER DEFAULT 12,
            approval_status TEXT DEFAULT 'pending',
            is_blocked INTEGER DEFAULT 0,
            executive_chef TEXT,
            public_transport TEXT,
            nearby_parking TEXT,
            additional_info TEXT,
            payment_methods TEXT DEFAULT '[]',
            has_vegetarian_options INTEGER DEFAULT 0,
            spoken_languages TEXT DEFAULT '[]',
            ask_bill_amount INTEGER DEFAULT 0,
            company_name TEXT,
            registration_number TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 4. Bookings & clients
    db.execute('''
        CREATE TABLE bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            restaurant_id INTEGER NOT NULL REFERENCES restaurants(id),
            date TEXT NOT NULL,
            time TEXT NOT NULL,
            guests INTEGER NOT NULL,
            children INTEGER NOT NULL DEFAULT 0,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT NOT NULL,
            special_request TEXT,
            newsletter INTEGER NOT NULL DEFAULT 0,
            client_ip TEXT,
            client_id TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            arrival_time TEXT,
            bill_requested INTEGER DEFAULT 0,
            departure_time TEXT,
            bill_amount REAL,
            status TEXT NOT NULL DEFAULT 'confirmed',
            table_id TEXT,
            zone_id TEXT,
            cancel_token TEXT UNIQUE
        )
    ''')

    db.execute('''
        CREATE TABLE clients (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            restaurant_id INTEGER REFERENCES restaurants(id),
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT NOT NULL,
            notes TEXT,
            tags TEXT DEFAULT '[]',
            total_spent REAL DEFAULT 0,
            visit_count INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 5. Availability & layout
    db.execute('''
        CREATE TABLE closed_days (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            restaurant_id INTEGER NOT NULL REFERENCES restaurants(id),
            date TEXT NOT NULL,
            service TEXT NOT NULL DEFAULT 'all',
            reason TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(restaurant_id, date, service)
        )
    ''')

    db.execute('''
        CREATE TABLE floor_plans (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            restaurant_id INTEGER NOT NULL UNIQUE REFERENCES restaurants(id),
            plan TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 6. Team & notifications
    db.execute('''
        CREATE TABLE restaurant_users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            restaurant_id INTEGER NOT NULL REFERENCES restaurants(id),
            user_id INTEGER REFERENCES users(id),
            email TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'staff',
            invited_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            accepted_at TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE notification_reads (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            booking_id INTEGER NOT NULL REFERENCES bookings(id) ON DELETE CASCADE,
            read_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(user_id, booking_id)
        )
    ''')


def create_indexes(db):
    """Create database indexes for query performance."""
    indexes = [
        'CREATE INDEX IF NOT EXISTS idx_restaurants_owner_id ON restaurants(owner_id)',
        'CREATE INDEX IF NOT EXISTS idx_restaurants_approval_status ON restaurants(approval_status)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_restaurant_date_time ON bookings(restaurant_id, date, time)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_client_ip ON bookings(client_ip)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_email ON bookings(email)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_client_id ON bookings(client_id)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_restaurant_id ON bookings(restaurant_id)',
        'CREATE INDEX IF NOT EXISTS idx_clients_restaurant_id ON clients(restaurant_id)',
        'CREATE INDEX IF NOT EXISTS idx_clients_email ON clients(email)',
        'CREATE INDEX IF NOT EXISTS idx_closed_days_restaurant_date ON closed_days(restaurant_id, date)',
        'CREATE INDEX IF NOT EXISTS idx_restaurant_users_restaurant ON restaurant_users(restaurant_id)',
    ]

    for statement in indexes:
        db.execute(statement)
