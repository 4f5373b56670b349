"""
Public API routes (no authentication).
Restaurant discovery, availability and booking time slots.
"""

from flask import Blueprint, request

from models.closed_day import get_closed_days
from models.restaurant import get_public_restaurants, get_public_restaurant, get_cuisine_categories
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_now
from utils.messages import MESSAGES
from utils.opening_hours import get_time_slots
from utils.validators import validate_date_format, sanitize_input

public_bp = Blueprint('public', __name__)


@public_bp.route('/restaurants')
def list_restaurants():
    """
    List approved, unblocked restaurants.

    Query params:
        cuisine: Cuisine filter (optional)
        q: Text search over name, location, description (optional)
    """
    cuisine = sanitize_input(request.args.get('cuisine'), max_length=100)
    search = sanitize_input(request.args.get('q'), max_length=100)

    restaurants = get_public_restaurants(cuisine=cuisine or None, search=search or None)
    return api_success(data=restaurants)


@public_bp.route('/restaurants/<int:restaurant_id>')
def restaurant_detail(restaurant_id):
    """Get a publicly visible restaurant."""
    restaurant = get_public_restaurant(restaurant_id)
    if not restaurant:
        return api_error(MESSAGES['restaurant_not_found'], status=404)
    return api_success(data=restaurant)


@public_bp.route('/restaurants/<int:restaurant_id>/closed-days')
def restaurant_closed_days(restaurant_id):
    """Get the closed days of a public restaurant."""
    if not get_public_restaurant(restaurant_id):
        return api_error(MESSAGES['restaurant_not_found'], status=404)
    return api_success(data=get_closed_days(restaurant_id))


@public_bp.route('/restaurants/<int:restaurant_id>/opening-hours')
def restaurant_opening_hours(restaurant_id):
    """Get the opening hours document (null when not configured)."""
    restaurant = get_public_restaurant(restaurant_id)
    if not restaurant:
        return api_error(MESSAGES['restaurant_not_found'], status=404)
    return api_success(opening_hours=restaurant.get('opening_hours'))


@public_bp.route('/restaurants/<int:restaurant_id>/time-slots')
def restaurant_time_slots(restaurant_id):
    """
    Get bookable lunch and dinner slots for a date.

    Query params:
        date: YYYY-MM-DD (required)
    """
    restaurant = get_public_restaurant(restaurant_id)
    if not restaurant:
        return api_error(MESSAGES['restaurant_not_found'], status=404)

    date_str = request.args.get('date', '')
    if not validate_date_format(date_str):
        return api_error(MESSAGES['invalid_date'])

    slots = get_time_slots(
        restaurant.get('opening_hours'),
        date_str,
        closed_days=get_closed_days(restaurant_id),
        now=get_now().replace(tzinfo=None)
    )
    return api_success(data={'date': date_str, **slots})


@public_bp.route('/cuisine-categories')
def cuisine_categories():
    """List cuisine categories."""
    return api_success(data=get_cuisine_categories())
