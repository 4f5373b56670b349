"""
Booking data access functions.

This module re-exports all functions from the split modules:
- booking_crud.py: Create, read and service-time updates
- booking_queries.py: Slot occupancy, anti-fraud, listings and notifications
- booking_stats.py: Monthly statistics
"""

from .booking_crud import (
    # Constants
    BOOKING_STATUSES,
    ACTIVE_STATUSES,
    OWNER_CREATED_IP,
    # Create/Read
    create_booking,
    get_booking_by_id,
    get_booking_by_token,
    # Update
    update_booking_status,
    mark_arrival,
    mark_bill_requested,
    mark_departure,
    assign_table,
)

from .booking_queries import (
    CLOSED_STATUSES,
    get_booked_guests_for_slot,
    find_email_mismatch_by_ip,
    find_email_mismatch_by_client_id,
    find_existing_booking,
    get_bookings_by_restaurant,
    get_bookings_for_month,
    get_bookings_for_date,
    get_notifications,
    mark_notifications_read,
)

from .booking_stats import (
    calc_change,
    previous_month,
    compute_monthly_stats,
)

__all__ = [
    'BOOKING_STATUSES',
    'ACTIVE_STATUSES',
    'OWNER_CREATED_IP',
    'CLOSED_STATUSES',
    'create_booking',
    'get_booking_by_id',
    'get_booking_by_token',
    'update_booking_status',
    'mark_arrival',
    'mark_bill_requested',
    'mark_departure',
    'assign_table',
    'get_booked_guests_for_slot',
    'find_email_mismatch_by_ip',
    'find_email_mismatch_by_client_id',
    'find_existing_booking',
    'get_bookings_by_restaurant',
    'get_bookings_for_month',
    'get_bookings_for_date',
    'get_notifications',
    'mark_notifications_read',
    'calc_change',
    'previous_month',
    'compute_monthly_stats',
]
