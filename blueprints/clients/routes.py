"""
Client routes.
A restaurant's customer records aggregated from booking history.
"""

from flask import Blueprint, request
from flask_login import login_required

from models.client import (
    SEARCH_MAX_LENGTH, get_client_by_id, get_clients_with_stats, get_client_with_details, update_client
)
from models.restaurant import get_restaurant_by_id
from utils.api_response import api_success, api_error
from utils.decorators import restaurant_access_required
from utils.helpers import get_json_payload
from utils.messages import MESSAGES
from utils.permissions import can_access_restaurant
from utils.validators import sanitize_input

clients_bp = Blueprint('clients', __name__)


def _check_client_access(client: dict):
    """Return an error response unless the current user may see the client."""
    if not client.get('restaurant_id'):
        return api_error(MESSAGES['client_without_restaurant'])
    restaurant = get_restaurant_by_id(client['restaurant_id'])
    if not restaurant:
        return api_error(MESSAGES['restaurant_not_found'], status=404)
    if not can_access_restaurant(restaurant):
        return api_error(MESSAGES['restaurant_forbidden'], status=403)
    return None


@clients_bp.route('/restaurant/<int:restaurant_id>')
@restaurant_access_required()
def list_for_restaurant(restaurant_id):
    """
    List the clients of a restaurant.

    Query params:
        search: Matches names, email and phone (optional)
    """
    search = sanitize_input(request.args.get('search', ''), max_length=SEARCH_MAX_LENGTH)
    clients = get_clients_with_stats(restaurant_id, search=search or None)
    return api_success(data=clients)


@clients_bp.route('/<int:client_id>')
@login_required
def detail(client_id):
    """Client with booking history and aggregates."""
    client = get_client_with_details(client_id)
    if not client:
        return api_error(MESSAGES['client_not_found'], status=404)

    error = _check_client_access(client)
    if error:
        return error

    return api_success(data=client)


@clients_bp.route('/<int:client_id>', methods=['PATCH'])
@login_required
def update(client_id):
    """
    Update notes and tags.

    Request body:
        notes: Free text (optional)
        tags: List of strings (optional)
    """
    client = get_client_by_id(client_id)
    if not client:
        return api_error(MESSAGES['client_not_found'], status=404)

    error = _check_client_access(client)
    if error:
        return error

    data = get_json_payload()
    fields = {}
    if 'notes' in data:
        fields['notes'] = sanitize_input(data['notes']) if data['notes'] else None
    if 'tags' in data:
        tags = data['tags'] or []
        if not isinstance(tags, list):
            return api_error(MESSAGES['invalid_request'])
        fields['tags'] = [str(tag).strip() for tag in tags if str(tag).strip()]

    if not fields:
        return api_error(MESSAGES['no_valid_fields'])

    update_client(client_id, **fields)
    return api_success(data=get_client_by_id(client_id), message=MESSAGES['client_updated'])
