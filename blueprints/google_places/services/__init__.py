"""Google Places services package."""

from blueprints.google_places.services.places_service import (  # noqa: F401
    PlacesServiceError,
    is_configured,
    search_places,
    get_place_details,
)
