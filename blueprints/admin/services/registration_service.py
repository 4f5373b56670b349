"""
Registration review.
Approving a registration request creates the restaurant it describes.
"""

import logging

from models.registration import (
    get_registration_by_id, update_registration_status, registration_to_restaurant
)
from models.restaurant import create_restaurant

logger = logging.getLogger(__name__)


def review_registration(registration_id: int, status: str, admin_notes: str = None) -> tuple:
    """
    Set the status of a registration request.

    The restaurant is created only when the request moves to 'approved', and
    before the status is stored, so a request that cannot become a restaurant
    keeps its previous status.

    Args:
        registration_id: Registration ID
        status: 'pending', 'approved' or 'rejected'
        admin_notes: Optional reviewer notes

    Returns:
        Tuple of (registration or None if not found, created restaurant ID or None)

    Raises:
        ValueError: If the status is invalid or the request holds invalid restaurant data
    """
    registration = get_registration_by_id(registration_id)
    if not registration:
        return None, None

    restaurant_id = None
    if status == 'approved' and registration['status'] != 'approved':
        restaurant_id = create_restaurant(registration_to_restaurant(registration))

    registration = update_registration_status(registration_id, status, admin_notes)

    if restaurant_id:
        logger.info(f'Registration {registration_id} approved, restaurant {restaurant_id} created')
    else:
        logger.info(f'Registration {registration_id} set to {status}')

    return registration, restaurant_id
