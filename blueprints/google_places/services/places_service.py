"""
Google Places client.
Text search for restaurants and rating/review details of a place.
"""

import logging

import requests
from flask import current_app

logger = logging.getLogger(__name__)

TEXT_SEARCH_URL = 'https://maps.googleapis.com/maps/api/place/textsearch/json'
DETAILS_URL = 'https://maps.googleapis.com/maps/api/place/details/json'
DETAILS_FIELDS = 'rating,user_ratings_total,reviews,price_level'
MAX_REVIEWS = 5


class PlacesServiceError(Exception):
    """Google Places could not be reached or answered with an error status."""


def is_configured() -> bool:
    return bool(current_app.config.get('GOOGLE_PLACES_API_KEY'))


def _get(url: str, params: dict) -> dict:
    params = dict(params, key=current_app.config['GOOGLE_PLACES_API_KEY'])
    try:
        response = requests.get(url, params=params, timeout=current_app.config.get('GOOGLE_PLACES_TIMEOUT', 10))
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        logger.error(f'Google Places request failed: {e}')
        raise PlacesServiceError(str(e)) from e
    except ValueError as e:
        logger.error(f'Google Places returned invalid JSON: {e}')
        raise PlacesServiceError('Invalid response') from e


def search_places(query: str, location: str = None) -> list:
    """
    Search restaurants by text.

    Args:
        query: Restaurant name or keywords
        location: Optional city or address appended to the query

    Returns:
        List of dicts with place_id, name, address, rating, user_ratings_total

    Raises:
        PlacesServiceError: On transport errors or an error status
    """
    search_query = f'{query} {location}' if location else query
    data = _get(TEXT_SEARCH_URL, {'query': search_query, 'type': 'restaurant'})

    status = data.get('status')
    if status not in ('OK', 'ZERO_RESULTS'):
        logger.warning(f'Google Places search error status: {status}')
        raise PlacesServiceError(f'Google Places API error: {status}')

    return [
        {
            'place_id': place.get('place_id'),
            'name': place.get('name'),
            'address': place.get('formatted_address'),
            'rating': place.get('rating'),
            'user_ratings_total': place.get('user_ratings_total'),
        }
        for place in data.get('results', [])
    ]


def get_place_details(place_id: str) -> dict | None:
    """
    Get rating, price level and the latest reviews of a place.

    Args:
        place_id: Google place ID

    Returns:
        Details dict, or None when Google does not know the place
    """
    data = _get(DETAILS_URL, {'place_id': place_id, 'fields': DETAILS_FIELDS, 'language': 'fr'})

    if data.get('status') != 'OK':
        return None

    result = data.get('result', {})
    return {
        'rating': result.get('rating'),
        'user_ratings_total': result.get('user_ratings_total'),
        'price_level': result.get('price_level'),
        'reviews': [
            {
                'author_name': review.get('author_name'),
                'rating': review.get('rating'),
                'text': review.get('text'),
                'relative_time_description': review.get('relative_time_description'),
                'profile_photo_url': review.get('profile_photo_url'),
            }
            for review in result.get('reviews', [])[:MAX_REVIEWS]
        ],
    }
