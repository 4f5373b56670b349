"""
Pytest configuration and fixtures.
Each test runs against its own temporary SQLite database.
"""

import os
from datetime import date, timedelta

import pytest

# Keep create_app() calls outside fixtures away from the development database
os.environ.setdefault('FLASK_ENV', 'test')

ADMIN_EMAIL = 'admin@resatable.ch'
ADMIN_PASSWORD = 'Admin123!'
OWNER_EMAIL = 'owner@bistrot.ch'
OWNER_PASSWORD = 'owner123'

FULL_WEEK_HOURS = {
    day: {
        'isOpen': True,
        'hasSecondService': True,
        'openTime1': '11:30',
        'closeTime1': '14:30',
        'openTime2': '18:30',
        'closeTime2': '22:30',
    }
    for day in ('Lundi', 'Mardi', 'Mercredi', 'Jeudi', 'Vendredi', 'Samedi', 'Dimanche')
}


def future_date(days: int = 30) -> str:
    """A date far enough ahead to be bookable whatever the time of day."""
    return (date.today() + timedelta(days=days)).isoformat()


def login(client, email: str, password: str):
    """Log a test client in through the API."""
    return client.post('/api/auth/login', json={'email': email, 'password': password})


@pytest.fixture
def app(tmp_path):
    """Create test application with an isolated database."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['RATELIMIT_ENABLED'] = False
    app.config['DATABASE_PATH'] = str(tmp_path / 'test.db')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')

    with app.app_context():
        init_db()

    yield app


@pytest.fixture
def client(app):
    """Anonymous test client."""
    return app.test_client()


@pytest.fixture
def authenticated_client(app):
    """Test client logged in as the seeded administrator."""
    admin_client = app.test_client()
    response = login(admin_client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert response.status_code == 200
    return admin_client


@pytest.fixture
def owner(app):
    """Restaurateur account."""
    from models.user import create_user, get_user_by_id

    with app.app_context():
        user_id = create_user(OWNER_EMAIL, OWNER_PASSWORD, 'Paul', 'Bocuse', user_type='restaurateur')
        return get_user_by_id(user_id)


@pytest.fixture
def restaurant(app, owner):
    """Approved restaurant of the owner, open every day for lunch and dinner."""
    from models.restaurant import create_restaurant, get_restaurant_by_id

    with app.app_context():
        restaurant_id = create_restaurant({
            'name': 'Le Bistrot du Lac',
            'cuisine': 'Français',
            'location': '1003 Lausanne',
            'price_range': '$$',
            'description': 'Cuisine de saison au bord du lac',
            'owner_id': owner['id'],
            'approval_status': 'approved',
            'capacity': 20,
            'opening_hours': FULL_WEEK_HOURS,
            'public_email': 'contact@bistrot.ch',
        })
        return get_restaurant_by_id(restaurant_id)


@pytest.fixture
def owner_client(app, owner):
    """Test client logged in as the restaurant owner."""
    owner_test_client = app.test_client()
    response = login(owner_test_client, OWNER_EMAIL, OWNER_PASSWORD)
    assert response.status_code == 200
    return owner_test_client


@pytest.fixture
def booking_payload(restaurant):
    """Valid public booking request body."""
    return {
        'restaurant_id': restaurant['id'],
        'date': future_date(),
        'time': '19:30',
        'guests': 2,
        'children': 0,
        'first_name': 'Marie',
        'last_name': 'Dupont',
        'email': 'marie.dupont@gmail.com',
        'phone': '+41 79 123 45 67',
        'special_request': 'Table près de la fenêtre',
        'newsletter': True,
    }
