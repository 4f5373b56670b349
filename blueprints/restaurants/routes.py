"""
Restaurant management routes.
Creation, ownership claims and dashboard settings of restaurants.
"""

from flask import Blueprint, current_app, g
from flask_login import login_required, current_user

from blueprints.public.routes import list_restaurants, restaurant_detail
from models.registration import cuisine_to_string
from models.restaurant import (
    create_restaurant, get_restaurant_by_id, get_restaurants_for_user, update_restaurant,
    claim_restaurant, OWNER_UPDATABLE_FIELDS
)
from utils.api_response import api_success, api_error
from utils.decorators import restaurant_owner_required
from utils.helpers import get_json_payload
from utils.messages import MESSAGES

restaurants_bp = Blueprint('restaurants', __name__)

# Public listing kept at /api/restaurants for older front-end builds
restaurants_bp.add_url_rule('', 'list_public', list_restaurants, methods=['GET'])
restaurants_bp.add_url_rule('/<int:restaurant_id>', 'detail_public', restaurant_detail, methods=['GET'])


@restaurants_bp.route('', methods=['POST'])
@login_required
def create():
    """
    Create a restaurant owned by the current user (pending approval).

    Request body:
        name, cuisine, location, price_range (required) and any settings field
    """
    data = {
        key: value for key, value in get_json_payload().items()
        if key in OWNER_UPDATABLE_FIELDS
    }
    if isinstance(data.get('cuisine'), list):
        data['cuisine'] = cuisine_to_string(data['cuisine'])
    data['owner_id'] = current_user.id
    data['approval_status'] = 'pending'

    try:
        restaurant_id = create_restaurant(data)
    except ValueError as e:
        return api_error(str(e))

    current_app.logger.info(f'Restaurant {restaurant_id} created by user {current_user.id}')
    return api_success(
        data=get_restaurant_by_id(restaurant_id),
        message=MESSAGES['restaurant_created'],
        status=201
    )


@restaurants_bp.route('/my-restaurants')
@login_required
def my_restaurants():
    """Restaurants the current user owns or belongs to, with access_role."""
    return api_success(data=get_restaurants_for_user(current_user.id))


@restaurants_bp.route('/<int:restaurant_id>/claim', methods=['POST'])
@login_required
def claim(restaurant_id):
    """Take ownership of a restaurant without owner."""
    restaurant = get_restaurant_by_id(restaurant_id)
    if not restaurant:
        return api_error(MESSAGES['restaurant_not_found'], status=404)

    if restaurant.get('owner_id') or not claim_restaurant(restaurant_id, current_user.id):
        return api_error(MESSAGES['restaurant_already_claimed'])

    current_app.logger.info(f'Restaurant {restaurant_id} claimed by user {current_user.id}')
    return api_success(data=get_restaurant_by_id(restaurant_id), message=MESSAGES['restaurant_claimed'])


@restaurants_bp.route('/<int:restaurant_id>', methods=['PUT'])
@restaurant_owner_required()
def update(restaurant_id):
    """
    Update restaurant settings.

    Only whitelisted settings fields are applied; others are ignored.
    """
    data = get_json_payload()
    if isinstance(data.get('cuisine'), list):
        data['cuisine'] = cuisine_to_string(data['cuisine'])

    try:
        updated_fields = update_restaurant(restaurant_id, data)
    except ValueError as e:
        return api_error(str(e))

    if not updated_fields:
        return api_error(MESSAGES['no_valid_fields'])

    return api_success(data=get_restaurant_by_id(restaurant_id), message=MESSAGES['restaurant_updated'])


@restaurants_bp.route('/<int:restaurant_id>/google-place', methods=['PUT'])
@restaurant_owner_required()
def link_google_place(restaurant_id):
    """
    Link (or unlink) a Google Places listing.

    Request body:
        google_place_id: Place ID, or null to unlink
        rating: Optional rating copied from the listing
    """
    data = get_json_payload()
    fields = ['google_place_id']
    if data.get('rating') is not None:
        fields.append('rating')

    try:
        update_restaurant(
            restaurant_id,
            {'google_place_id': data.get('google_place_id') or None, 'rating': data.get('rating')},
            allowed_fields=fields
        )
    except (TypeError, ValueError):
        return api_error(MESSAGES['invalid_request'])

    return api_success(data=get_restaurant_by_id(g.restaurant['id']), message=MESSAGES['restaurant_updated'])
