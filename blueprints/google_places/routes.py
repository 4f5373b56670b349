"""
Google Places routes.
Lets owners link their restaurant to a Google listing and show its rating.
"""

from flask import Blueprint, request

from blueprints.google_places.services import (
    PlacesServiceError, is_configured, search_places, get_place_details
)
from utils.api_response import api_success, api_error
from utils.messages import MESSAGES

google_places_bp = Blueprint('google_places', __name__)


@google_places_bp.route('/configured')
def configured():
    return api_success(data={'configured': is_configured()})


@google_places_bp.route('/search')
def search():
    """
    Search restaurants on Google.

    Query params:
        q: Search text (required)
        location: City or address (optional)
    """
    if not is_configured():
        return api_error(MESSAGES['places_not_configured'], status=503)

    query = request.args.get('q', '').strip()
    if not query:
        return api_error(MESSAGES['places_query_required'])

    try:
        results = search_places(query, request.args.get('location') or None)
    except PlacesServiceError:
        return api_error(MESSAGES['places_unavailable'], status=502)

    return api_success(data=results)


@google_places_bp.route('/<place_id>')
def details(place_id):
    """Rating, price level and up to five reviews of a place."""
    if not is_configured():
        return api_error(MESSAGES['places_not_configured'], status=503)

    try:
        place = get_place_details(place_id)
    except PlacesServiceError:
        return api_error(MESSAGES['places_unavailable'], status=502)

    if not place:
        return api_error(MESSAGES['place_not_found'], status=404)

    return api_success(data=place)
