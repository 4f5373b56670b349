"""
Flask extensions initialization.
Extensions are initialized here and then initialized with the app in app.py.
"""

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

# Initialize Flask-Login
login_manager = LoginManager()

# Initialize CSRF Protection
csrf = CSRFProtect()

# Initialize rate limiting (limits and storage come from app config)
limiter = Limiter(key_func=get_remote_address)

# Configure Login Manager
login_manager.login_message = 'Veuillez vous connecter pour accéder à cette page'
login_manager.session_protection = 'basic'


@login_manager.user_loader
def load_user(user_id):
    """
    Load user by ID for Flask-Login.

    Args:
        user_id: The user ID as a string

    Returns:
        User object or None if not found
    """
    from models.user import get_user_by_id, User

    user_dict = get_user_by_id(int(user_id))
    if user_dict:
        return User(user_dict)
    return None


@login_manager.unauthorized_handler
def unauthorized():
    """Return a JSON 401 instead of redirecting to a login page."""
    from utils.api_response import api_error
    from utils.messages import MESSAGES

    return api_error(MESSAGES['unauthorized'], status=401)


# Per-endpoint limits (the default limit comes from RATELIMIT_DEFAULT)
AUTH_RATE_LIMIT = '10 per 15 minutes'
UPLOAD_RATE_LIMIT = '10 per hour'
