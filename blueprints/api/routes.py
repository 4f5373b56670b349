"""
Service-level API routes.
"""

import sqlite3

from flask import Blueprint, current_app

from database import get_db
from utils.api_response import api_success, api_error


api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """Liveness probe for the load balancer (no authentication)."""
    try:
        get_db().execute('SELECT 1')
    except sqlite3.Error as error:
        current_app.logger.error(f'Health check failed: {error}')
        return api_error('database unavailable', status=503)

    return api_success(data={
        'status': 'ok',
        'app': current_app.config['APP_NAME'],
        'version': current_app.config['APP_VERSION'],
    })
