"""
Tests for restaurant registration endpoints.
"""

from conftest import login

REGISTRATION = {
    'email': 'nouveau@trattoria.ch',
    'password': 'pasta123',
    'first_name': 'Luigi',
    'last_name': 'Rossi',
    'restaurant_name': 'Trattoria Luigi',
    'address': 'Rue du Lac 5',
    'postal_code': '1800',
    'city': 'Vevey',
    'phone': '021 921 00 00',
    'company_name': 'Luigi Sàrl',
    'cuisine_type': ['Italien', 'Pizza'],
    'price_range': '$$',
    'photos': ['/uploads/a.jpg'],
}


class TestRegisterWithAccount:
    """POST /api/registrations/with-account"""

    def test_creates_user_and_pending_restaurant(self, client):
        response = client.post('/api/registrations/with-account', json=REGISTRATION)

        assert response.status_code == 201
        data = response.json['data']
        assert data['user']['user_type'] == 'restaurateur'
        assert 'password_hash' not in data['user']
        restaurant = data['restaurant']
        assert restaurant['approval_status'] == 'pending'
        assert restaurant['cuisine'] == 'Italien, Pizza'
        assert restaurant['location'] == '1800 Vevey'
        assert restaurant['photos'] == ['/uploads/a.jpg']
        assert restaurant['owner_id'] == data['user']['id']

        # Logged in, hidden from the public
        assert client.get('/api/my-restaurants').json['data'][0]['id'] == restaurant['id']
        assert client.get(f'/api/public/restaurants/{restaurant["id"]}').status_code == 404

    def test_location_falls_back_to_address(self, client):
        payload = {k: v for k, v in REGISTRATION.items() if k not in ('postal_code', 'city')}
        response = client.post('/api/registrations/with-account', json=payload)
        assert response.json['data']['restaurant']['location'] == 'Rue du Lac 5'

    def test_duplicate_email(self, client, owner):
        payload = dict(REGISTRATION, email='owner@bistrot.ch')
        response = client.post('/api/registrations/with-account', json=payload)
        assert response.status_code == 400
        assert response.json['error'] == 'Un compte avec cet email existe déjà'

    def test_missing_cuisine(self, client):
        payload = dict(REGISTRATION, cuisine_type=[])
        assert client.post('/api/registrations/with-account', json=payload).status_code == 400

    def test_missing_company(self, client):
        payload = {k: v for k, v in REGISTRATION.items() if k != 'company_name'}
        assert client.post('/api/registrations/with-account', json=payload).status_code == 400


class TestRegisterRestaurant:
    """POST /api/registrations (logged in)"""

    def test_client_becomes_restaurateur(self, app):
        from models.user import create_user, get_user_by_email

        with app.app_context():
            create_user('gourmet@gmail.com', 'gourmet1')
        user_client = app.test_client()
        login(user_client, 'gourmet@gmail.com', 'gourmet1')

        response = user_client.post('/api/registrations', json={
            'restaurant_name': 'Le Petit Coin', 'address': 'Place 1', 'phone': '022 000 00 00',
            'cuisine_type': 'Français', 'price_range': '$',
        })

        assert response.status_code == 201
        assert response.json['data']['approval_status'] == 'pending'
        with app.app_context():
            assert get_user_by_email('gourmet@gmail.com')['user_type'] == 'restaurateur'

    def test_missing_fields(self, owner_client):
        response = owner_client.post('/api/registrations', json={'restaurant_name': 'X'})
        assert response.status_code == 400
        assert response.json['error'] == 'Informations requises manquantes'

    def test_requires_login(self, client):
        assert client.post('/api/registrations', json={}).status_code == 401


class TestRegistrationRequests:
    """Requests reviewed by administrators."""

    def _file(self, owner_client, **extra):
        return owner_client.post('/api/registrations/request', json={
            'restaurant_name': 'Sushi Zen', 'address': 'Rue 3, Genève', 'phone': '022 111 11 11',
            'company_name': 'Zen SA', 'cuisine_type': ['Japonais', 'Sushi'], 'price_range': '$$$',
            **extra,
        })

    def test_file_and_list_own(self, owner_client):
        response = self._file(owner_client)

        assert response.status_code == 201
        assert response.json['data']['status'] == 'pending'
        assert response.json['data']['cuisine_type'] == ['Japonais', 'Sushi']
        assert len(owner_client.get('/api/registrations').json['data']) == 1

    def test_missing_information(self, owner_client):
        response = owner_client.post('/api/registrations/request', json={'restaurant_name': 'X'})
        assert response.status_code == 400

    def test_admin_approval_creates_restaurant(self, owner_client, authenticated_client, owner):
        registration = self._file(owner_client).json['data']

        assert len(authenticated_client.get('/api/registrations').json['data']) == 1

        response = authenticated_client.patch(f'/api/admin/registrations/{registration["id"]}', json={
            'status': 'approved', 'admin_notes': 'OK',
        })

        assert response.status_code == 200
        assert response.json['data']['status'] == 'approved'
        restaurant_id = response.json['restaurant_id']

        public = authenticated_client.get(f'/api/public/restaurants/{restaurant_id}').json['data']
        assert public['name'] == 'Sushi Zen'
        assert public['cuisine'] == 'Japonais, Sushi'
        assert public['owner_id'] == owner['id']

    def test_admin_rejection(self, owner_client, authenticated_client):
        registration = self._file(owner_client).json['data']

        response = authenticated_client.patch(f'/api/admin/registrations/{registration["id"]}',
                                              json={'status': 'rejected'})
        assert response.json['data']['status'] == 'rejected'
        assert response.json['restaurant_id'] is None

    def test_invalid_review(self, authenticated_client):
        assert authenticated_client.patch('/api/admin/registrations/1', json={'status': 'ok'}).status_code == 400
        assert authenticated_client.patch('/api/admin/registrations/99', json={'status': 'approved'}).status_code == 404

    def test_invalid_opening_hours_rejected(self, owner_client):
        response = self._file(owner_client, opening_hours={
            'Lundi': {'isOpen': True, 'openTime1': '25:00', 'closeTime1': '11:00'}
        })

        assert response.status_code == 400
        assert 'Lundi' in response.json['error']
        assert owner_client.get('/api/registrations').json['data'] == []

    def test_failed_approval_keeps_status(self, app, owner_client, authenticated_client):
        from database import get_db

        registration = self._file(owner_client).json['data']
        with app.app_context():
            db = get_db()
            db.execute('UPDATE restaurant_registrations SET price_range = ? WHERE id = ?',
                       ('', registration['id']))
            db.commit()

        response = authenticated_client.patch(f'/api/admin/registrations/{registration["id"]}',
                                              json={'status': 'approved'})
        assert response.status_code == 400

        with app.app_context():
            db = get_db()
            status = db.execute('SELECT status FROM restaurant_registrations WHERE id = ?',
                                (registration['id'],)).fetchone()['status']
            restaurants = db.execute('SELECT COUNT(*) FROM restaurants').fetchone()[0]
        assert status == 'pending'
        assert restaurants == 0

    def test_second_approval_creates_no_restaurant(self, app, owner_client, authenticated_client):
        from database import get_db

        registration = self._file(owner_client).json['data']
        url = f'/api/admin/registrations/{registration["id"]}'

        first = authenticated_client.patch(url, json={'status': 'approved'})
        second = authenticated_client.patch(url, json={'status': 'approved'})

        assert first.json['restaurant_id'] is not None
        assert second.status_code == 200
        assert second.json['restaurant_id'] is None
        with app.app_context():
            assert get_db().execute('SELECT COUNT(*) FROM restaurants').fetchone()[0] == 1
