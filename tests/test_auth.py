"""
Tests for authentication endpoints.
"""

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, login


class TestRegister:
    """Account creation."""

    def test_register_creates_account_and_session(self, client):
        response = client.post('/api/auth/register', json={
            'email': 'Lea.Martin@bluewin.ch',
            'password': 'secret1',
            'first_name': 'Léa',
            'last_name': 'Martin',
        })

        assert response.status_code == 201
        data = response.json['data']
        assert data['email'] == 'lea.martin@bluewin.ch'
        assert 'password_hash' not in data

        me = client.get('/api/auth/user')
        assert me.status_code == 200
        assert me.json['data']['first_name'] == 'Léa'

    def test_register_duplicate_email(self, client):
        payload = {'email': 'dup@bluewin.ch', 'password': 'secret1'}
        client.post('/api/auth/register', json=payload)

        response = client.post('/api/auth/register', json=payload)
        assert response.status_code == 400
        assert response.json['error'] == 'Un compte avec cet email existe déjà'

    def test_register_short_password(self, client):
        response = client.post('/api/auth/register', json={'email': 'short@bluewin.ch', 'password': '123'})
        assert response.status_code == 400
        assert 'password' in response.json['errors']

    def test_register_invalid_email(self, client):
        response = client.post('/api/auth/register', json={'email': 'not-an-email', 'password': 'secret1'})
        assert response.status_code == 400


class TestCheckEmail:
    """Email availability lookup."""

    def test_existing_email(self, client):
        response = client.get(f'/api/auth/check-email?email={ADMIN_EMAIL}')
        assert response.json['data']['exists'] is True

    def test_unknown_email(self, client):
        response = client.get('/api/auth/check-email?email=nobody@bluewin.ch')
        assert response.json['data']['exists'] is False

    def test_invalid_email(self, client):
        response = client.get('/api/auth/check-email?email=nope')
        assert response.status_code == 400


class TestLogin:
    """Login and logout."""

    def test_login_success(self, client):
        response = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        assert response.status_code == 200
        assert response.json['data']['is_admin'] == 1
        assert response.json['data']['last_login'] is not None

    def test_login_wrong_password(self, client):
        response = login(client, ADMIN_EMAIL, 'wrong-password')
        assert response.status_code == 401
        assert response.json['error'] == 'Email ou mot de passe incorrect'

    def test_login_unknown_user(self, client):
        response = login(client, 'ghost@bluewin.ch', 'whatever')
        assert response.status_code == 401

    def test_login_missing_fields(self, client):
        response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL})
        assert response.status_code == 400

    def test_logout(self, authenticated_client):
        response = authenticated_client.post('/api/auth/logout')
        assert response.status_code == 200

        assert authenticated_client.get('/api/auth/user').status_code == 401

    def test_logout_redirect(self, authenticated_client):
        response = authenticated_client.get('/api/logout')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/')
        assert authenticated_client.get('/api/auth/user').status_code == 401


class TestCsrfToken:
    """CSRF token for the single-page front end."""

    def test_csrf_token_issued(self, client):
        response = client.get('/api/auth/csrf-token')
        assert response.status_code == 200
        assert response.json['data']['csrf_token']

    def test_csrf_enforced_when_enabled(self, app):
        app.config['WTF_CSRF_ENABLED'] = True
        csrf_client = app.test_client()

        response = csrf_client.post('/api/auth/logout')
        assert response.status_code == 400
        assert response.json['error'] == 'Jeton de sécurité invalide ou expiré'

        token = csrf_client.get('/api/auth/csrf-token').json['data']['csrf_token']
        response = csrf_client.post('/api/auth/logout', headers={'X-CSRFToken': token})
        assert response.status_code == 200
