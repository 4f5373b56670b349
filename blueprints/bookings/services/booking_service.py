"""
Business rules for booking creation.
Availability, anti-fraud and capacity decisions for public and dashboard bookings.
"""

import logging

from models.booking import (
    create_booking, get_booked_guests_for_slot, find_email_mismatch_by_ip,
    find_email_mismatch_by_client_id, find_existing_booking, OWNER_CREATED_IP, BOOKING_STATUSES
)
from models.client import upsert_client_from_booking
from models.closed_day import get_closed_days_for_date
from models.restaurant import get_effective_capacity
from utils.datetime_helpers import get_now
from utils.messages import MESSAGES, get_message
from utils.opening_hours import get_day_hours, is_time_within_opening_hours, to_minutes
from utils.validators import normalize_email

logger = logging.getLogger(__name__)


def check_closed_day(restaurant_id: int, date: str, service: str | None, owner: bool = False) -> None:
    """
    Reject bookings on closed dates or services.

    Raises:
        ValueError: If the date, or the booking's service, is closed
    """
    closed = {day['service'] for day in get_closed_days_for_date(restaurant_id, date)}
    if 'all' in closed:
        raise ValueError(MESSAGES['date_closed_owner' if owner else 'date_closed'])
    if service and service in closed:
        raise ValueError(MESSAGES['service_closed'])


def check_opening_hours(opening_hours: dict | None, date: str, time: str) -> str | None:
    """
    Check a booking time against the opening hours.

    Returns:
        The matched service ('lunch' or 'dinner')

    Raises:
        ValueError: If the restaurant is closed that day or the time is outside opening hours
    """
    if opening_hours and get_day_hours(opening_hours, date) is None:
        raise ValueError(MESSAGES['restaurant_closed_day'])

    service = is_time_within_opening_hours(opening_hours, date, time)
    if service is None:
        raise ValueError(MESSAGES['outside_opening_hours'])
    return service


def check_not_in_past(date: str, time: str) -> None:
    """Reject dates before today and times already passed today."""
    now = get_now()
    today = now.date().isoformat()
    if date < today or (date == today and to_minutes(time) <= now.hour * 60 + now.minute):
        raise ValueError(MESSAGES['date_in_past'])


def check_guest_range(restaurant: dict, guests: int) -> None:
    """Reject party sizes outside the restaurant's limits."""
    min_guests = restaurant.get('min_guests') or 1
    max_guests = restaurant.get('max_guests') or 12
    if not min_guests <= guests <= max_guests:
        raise ValueError(get_message('guests_out_of_range', min=min_guests, max=max_guests))


def check_anti_fraud(client_ip: str, client_id: str, email: str, date: str, time: str) -> None:
    """
    Reject suspicious repeat bookings.

    Raises:
        ValueError: If this device used another email in the last 24 hours,
            or already booked the same slot
    """
    if find_email_mismatch_by_ip(client_ip, email) or find_email_mismatch_by_client_id(client_id, email):
        logger.warning(f'Booking rejected: device email mismatch (ip={client_ip})')
        raise ValueError(MESSAGES['device_email_mismatch'])

    if find_existing_booking(client_ip, date, time):
        logger.warning(f'Booking rejected: duplicate slot (ip={client_ip}, {date} {time})')
        raise ValueError(MESSAGES['duplicate_slot_booking'])


def decide_status(restaurant: dict, date: str, time: str, party_size: int, online: bool) -> str:
    """
    Decide the initial status from the slot occupancy.

    Args:
        restaurant: Restaurant dict
        date: Booking date
        time: Booking time
        party_size: Adults + children of the new booking
        online: Public booking (uses online capacity, 'pending' when it fits)

    Returns:
        'waiting' when the slot would overflow, else 'pending' (online) or 'confirmed'
    """
    booked = get_booked_guests_for_slot(restaurant['id'], date, time)
    capacity = get_effective_capacity(restaurant, online=online)

    if booked + party_size > capacity:
        return 'waiting'
    return 'pending' if online else 'confirmed'


def create_public_booking(restaurant: dict, data: dict, client_ip: str, client_id: str) -> dict:
    """
    Validate and create a booking submitted by a visitor.

    Args:
        restaurant: Publicly visible restaurant dict
        data: Validated form data
        client_ip: Originating IP address
        client_id: Device cookie value

    Returns:
        The created booking dict

    Raises:
        ValueError: With a user-facing message when the booking is refused
    """
    date, time = data['date'], data['time']
    guests = data['guests']
    children = data.get('children') or 0
    email = normalize_email(data['email'])

    check_not_in_past(date, time)
    check_guest_range(restaurant, guests)

    service = is_time_within_opening_hours(restaurant.get('opening_hours'), date, time)
    check_closed_day(restaurant['id'], date, service)
    check_opening_hours(restaurant.get('opening_hours'), date, time)

    check_anti_fraud(client_ip, client_id, email, date, time)

    status = decide_status(restaurant, date, time, guests + children, online=True)

    booking = create_booking(
        restaurant_id=restaurant['id'],
        date=date,
        time=time,
        guests=guests,
        children=children,
        first_name=data['first_name'].strip(),
        last_name=data['last_name'].strip(),
        email=email,
        phone=data['phone'].strip(),
        special_request=data.get('special_request'),
        newsletter=data.get('newsletter', False),
        client_ip=client_ip,
        client_id=client_id,
        status=status
    )

    upsert_client_from_booking(
        restaurant['id'], booking['first_name'], booking['last_name'], booking['email'], booking['phone']
    )

    logger.info(f'Booking {booking["id"]} created for restaurant {restaurant["id"]} ({status})')
    return booking


def create_owner_booking(restaurant: dict, data: dict, user_id: int) -> dict:
    """
    Create a booking from the dashboard.

    Opening hours and anti-fraud rules do not apply; closed days do.

    Args:
        restaurant: Restaurant dict
        data: Validated form data
        user_id: Staff member creating the booking

    Returns:
        The created booking dict

    Raises:
        ValueError: If the date is closed or the status is invalid
    """
    date, time = data['date'], data['time']
    guests = data['guests']
    children = data.get('children') or 0

    check_closed_day(restaurant['id'], date, None, owner=True)

    status = data.get('status')
    if status:
        if status not in BOOKING_STATUSES:
            raise ValueError(MESSAGES['invalid_status'])
    else:
        status = decide_status(restaurant, date, time, guests + children, online=False)

    booking = create_booking(
        restaurant_id=restaurant['id'],
        date=date,
        time=time,
        guests=guests,
        children=children,
        first_name=data['first_name'].strip(),
        last_name=data['last_name'].strip(),
        email=normalize_email(data.get('email')),
        phone=(data.get('phone') or '').strip(),
        special_request=data.get('special_request'),
        client_ip=OWNER_CREATED_IP,
        client_id=f'owner_{user_id}',
        status=status,
        table_id=data.get('table_id'),
        zone_id=data.get('zone_id')
    )

    if booking['email'] or booking['phone']:
        upsert_client_from_booking(
            restaurant['id'], booking['first_name'], booking['last_name'], booking['email'], booking['phone']
        )

    logger.info(f'Owner booking {booking["id"]} created for restaurant {restaurant["id"]} ({status})')
    return booking
