"""
ResaTable - Restaurant discovery and table reservation
Flask application factory and initialization
"""

import os
import sqlite3
import time
import click
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask, g, request, send_from_directory
from flask_wtf.csrf import CSRFError
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf, limiter

# Import database functions
from database import close_db, init_db

from utils.api_response import api_success, api_error
from utils.messages import MESSAGES


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    if config_name == 'production':
        config[config_name].validate()

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request hooks
    register_request_hooks(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)
    # Initialize CSRF Protection
    csrf.init_app(app)
    # Initialize rate limiting
    limiter.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.auth.routes import auth_bp, logout_redirect
    from blueprints.public.routes import public_bp, cuisine_categories
    from blueprints.restaurants.routes import restaurants_bp, my_restaurants
    from blueprints.bookings.routes import bookings_bp
    from blueprints.clients.routes import clients_bp
    from blueprints.closed_days.routes import closed_days_bp
    from blueprints.floor_plans.routes import floor_plans_bp
    from blueprints.team.routes import team_bp
    from blueprints.upload.routes import upload_bp, serve_upload
    from blueprints.google_places.routes import google_places_bp
    from blueprints.registrations.routes import registrations_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.api.routes import api_bp

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(public_bp, url_prefix='/api/public')
    app.register_blueprint(restaurants_bp, url_prefix='/api/restaurants')
    app.register_blueprint(bookings_bp, url_prefix='/api/bookings')
    app.register_blueprint(clients_bp, url_prefix='/api/clients')
    app.register_blueprint(closed_days_bp, url_prefix='/api/closed-days')
    app.register_blueprint(floor_plans_bp, url_prefix='/api/floor-plans')
    app.register_blueprint(team_bp, url_prefix='/api/team')
    app.register_blueprint(upload_bp, url_prefix='/api/upload')
    app.register_blueprint(google_places_bp, url_prefix='/api/google-places')
    app.register_blueprint(registrations_bp, url_prefix='/api/registrations')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(api_bp, url_prefix='/api')

    # Short paths used by the front end
    app.add_url_rule('/api/my-restaurants', 'my_restaurants', my_restaurants)
    app.add_url_rule('/api/cuisine-categories', 'cuisine_categories', cuisine_categories)
    app.add_url_rule('/api/logout', 'logout_redirect', logout_redirect)
    app.add_url_rule('/uploads/<path:filename>', 'uploads', serve_upload)

    spa_folder = app.config.get('SPA_DIST_FOLDER')

    # Set default route
    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def index(path):
        """Serve the built front end, or a service banner without one."""
        if path.startswith('api/'):
            return api_error(MESSAGES['not_found'], status=404)
        if spa_folder and os.path.isdir(spa_folder):
            if path and os.path.isfile(os.path.join(spa_folder, path)):
                return send_from_directory(spa_folder, path)
            return send_from_directory(spa_folder, 'index.html')
        return api_success(data={'app': app.config['APP_NAME'], 'version': app.config['APP_VERSION']})


def register_error_handlers(app):
    """Register JSON error handlers."""

    @app.errorhandler(400)
    def bad_request_error(error):
        return api_error(MESSAGES['invalid_request'], status=400)

    @app.errorhandler(CSRFError)
    def csrf_error(error):
        app.logger.warning(f'CSRF validation failed on {request.path}: {error.description}')
        return api_error(MESSAGES['csrf_failed'], status=400)

    @app.errorhandler(401)
    def unauthorized_error(error):
        return api_error(MESSAGES['unauthorized'], status=401)

    @app.errorhandler(403)
    def forbidden_error(error):
        return api_error(MESSAGES['unauthorized'], status=403)

    @app.errorhandler(404)
    def not_found_error(error):
        return api_error(MESSAGES['not_found'], status=404)

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return api_error(MESSAGES['method_not_allowed'], status=405)

    @app.errorhandler(413)
    def too_large_error(error):
        return api_error(MESSAGES['file_too_large'], status=413)

    @app.errorhandler(429)
    def rate_limit_error(error):
        app.logger.warning(f'Rate limit exceeded on {request.path} ({request.remote_addr})')
        return api_error(MESSAGES['too_many_attempts'], status=429)

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        app.logger.error(f'Server error on {request.path}: {error}', exc_info=True)
        return api_error(MESSAGES['server_error'], status=500)


def register_request_hooks(app):
    """Log API requests with their duration."""

    @app.before_request
    def start_timer():
        g.request_start = time.perf_counter()

    @app.after_request
    def log_api_request(response):
        if request.path.startswith('/api'):
            duration = (time.perf_counter() - g.get('request_start', time.perf_counter())) * 1000
            app.logger.info(f'{request.method} {request.path} {response.status_code} in {duration:.0f}ms')
        return response


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('create-admin')
    @click.argument('email')
    @click.password_option()
    def create_admin_command(email, password):
        """Create an administrator account."""
        from models.user import create_user

        with app.app_context():
            try:
                user_id = create_user(
                    email=email,
                    password=password,
                    is_admin=True,
                    user_type='admin'
                )
                click.echo(f'Admin created successfully! ID: {user_id}')
            except sqlite3.IntegrityError:
                click.echo(f'Error creating admin: {email} already exists', err=True)

    @app.cli.command('send-reminders')
    @click.option('--date', 'target_date', default=None, help='Booking date YYYY-MM-DD (default: tomorrow)')
    def send_reminders_command(target_date):
        """E-mail reminders for tomorrow's bookings (run daily at 10:00)."""
        from blueprints.bookings.services import send_booking_reminders

        with app.app_context():
            result = send_booking_reminders(target_date)
        click.echo(f'Reminders for {result["date"]}: {result["sent"]}/{result["total"]} sent')


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = RotatingFileHandler('logs/resatable.log', maxBytes=5 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('ResaTable startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
