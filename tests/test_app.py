"""
Test application factory, configuration and error handling.
"""

import pytest
from app import create_app
from config import ProductionConfig


class TestAppFactory:
    """Test Flask application factory."""

    def test_create_app_development(self):
        """Test app creation with development config."""
        app = create_app('development')
        assert app is not None
        assert app.config['DEBUG'] is True
        assert app.config['TESTING'] is False

    def test_create_app_test(self):
        """Test app creation with test config."""
        app = create_app('test')
        assert app.config['TESTING'] is True
        assert app.config['WTF_CSRF_ENABLED'] is False
        assert app.config['RATELIMIT_ENABLED'] is False

    def test_app_has_blueprints(self):
        """Test that all blueprints are registered."""
        app = create_app('test')
        blueprint_names = set(app.blueprints.keys())

        assert {
            'auth', 'public', 'restaurants', 'bookings', 'clients', 'closed_days',
            'floor_plans', 'team', 'upload', 'google_places', 'registrations', 'admin', 'api'
        } <= blueprint_names

    def test_app_has_extensions(self):
        """Test that extensions are initialized."""
        app = create_app('test')
        assert hasattr(app, 'login_manager')
        assert 'csrf' in app.extensions


class TestAppConfiguration:
    """Test application configuration."""

    def test_secret_key_set(self):
        app = create_app('test')
        assert app.config['SECRET_KEY']

    def test_defaults(self):
        app = create_app('test')
        assert app.config['APP_NAME'] == 'ResaTable'
        assert app.config['TIMEZONE'] == 'Europe/Zurich'
        assert app.config['DEFAULT_CAPACITY'] == 40
        assert app.config['MAX_CONTENT_LENGTH'] == 10 * 1024 * 1024

    def test_production_requires_secret_key(self, monkeypatch):
        """Production refuses to start without a strong SECRET_KEY."""
        monkeypatch.delenv('SECRET_KEY', raising=False)
        with pytest.raises(ValueError):
            ProductionConfig.validate()

    def test_production_rejects_short_secret_key(self, monkeypatch):
        monkeypatch.setenv('SECRET_KEY', 'short')
        with pytest.raises(ValueError):
            ProductionConfig.validate()


class TestCLICommands:
    """Test CLI command registration."""

    def test_cli_commands_registered(self):
        app = create_app('test')
        commands = list(app.cli.commands.keys())

        assert 'init-db' in commands
        assert 'create-admin' in commands
        assert 'send-reminders' in commands

    def test_create_admin_command(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-admin', 'chef@resatable.ch'], input='secret99\nsecret99\n')

        assert 'Admin created successfully' in result.output

        from models.user import get_user_by_email
        with app.app_context():
            user = get_user_by_email('chef@resatable.ch')
        assert user['is_admin'] == 1

    def test_send_reminders_command(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['send-reminders', '--date', '2030-01-15'])

        assert 'Reminders for 2030-01-15: 0/0 sent' in result.output


class TestErrorHandling:
    """JSON error responses."""

    def test_health(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.json['data']['status'] == 'ok'
        assert response.json['data']['app'] == 'ResaTable'

    def test_unknown_api_route_returns_json_404(self, client):
        response = client.get('/api/does-not-exist')
        assert response.status_code == 404
        assert response.json['success'] is False

    def test_method_not_allowed(self, client):
        response = client.delete('/api/health')
        assert response.status_code == 405
        assert response.json['success'] is False

    def test_login_required_returns_json_401(self, client):
        response = client.get('/api/auth/user')
        assert response.status_code == 401
        assert response.json['error'] == 'Non autorisé'

    def test_home_without_front_end(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert response.json['data']['app'] == 'ResaTable'
