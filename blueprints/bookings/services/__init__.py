"""Booking services package."""

from blueprints.bookings.services.booking_service import (  # noqa: F401
    create_public_booking,
    create_owner_booking,
)
from blueprints.bookings.services.notification_service import (  # noqa: F401
    notify_new_booking,
    send_status_email,
    send_booking_reminders,
    verify_action_signature,
    BOOKING_ACTIONS,
)
from blueprints.bookings.services.export_service import build_bookings_workbook  # noqa: F401
