"""
Booking e-mail notifications.
Guest and restaurant e-mails sent through SendGrid, rendered from templates/emails/.

Sending never raises: a missing API key or a SendGrid failure is logged and
the triggering request carries on.
"""

import hashlib
import hmac
import logging
from datetime import timedelta

from flask import current_app, render_template
from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, Email, To

from models.booking import get_bookings_for_date
from models.restaurant import get_restaurant_by_id
from utils.datetime_helpers import get_today
from utils.helpers import format_date
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)

BOOKING_ACTIONS = {
    'confirm': 'confirmed',
    'refuse': 'refused',
    'waiting': 'waiting',
}


# =============================================================================
# SIGNED ACTION LINKS
# =============================================================================

def generate_action_signature(cancel_token: str, action: str) -> str:
    """HMAC-SHA256 of '<token>:<action>' keyed with SECRET_KEY."""
    secret = current_app.config['SECRET_KEY'].encode()
    return hmac.new(secret, f'{cancel_token}:{action}'.encode(), hashlib.sha256).hexdigest()


def verify_action_signature(cancel_token: str, action: str, signature: str) -> bool:
    """Check a signature received on an e-mail action link."""
    if not signature:
        return False
    return hmac.compare_digest(generate_action_signature(cancel_token, action), signature)


def build_action_url(cancel_token: str, action: str) -> str:
    """Absolute URL of a signed restaurant action link."""
    base_url = current_app.config['PUBLIC_BASE_URL'].rstrip('/')
    signature = generate_action_signature(cancel_token, action)
    return f'{base_url}/api/bookings/action/{cancel_token}/{action}?sig={signature}'


def build_cancel_url(cancel_token: str) -> str:
    """Absolute URL of the guest self-cancellation link."""
    base_url = current_app.config['PUBLIC_BASE_URL'].rstrip('/')
    return f'{base_url}/api/bookings/cancel/{cancel_token}'


def build_restaurant_url(restaurant_id: int) -> str:
    """Absolute URL of the public restaurant page (rebooking)."""
    base_url = current_app.config['PUBLIC_BASE_URL'].rstrip('/')
    return f'{base_url}/restaurant/{restaurant_id}'


# =============================================================================
# SENDING
# =============================================================================

def guests_label(booking: dict) -> str:
    """'2 adultes + 1 enfant' style party description."""
    guests = booking['guests']
    label = f'{guests} adulte{"s" if guests > 1 else ""}'
    children = booking.get('children') or 0
    if children:
        label += f' + {children} enfant{"s" if children > 1 else ""}'
    return label


def send_email(to_email: str, subject: str, html_body: str) -> bool:
    """
    Send an HTML e-mail through SendGrid.

    Args:
        to_email: Recipient address
        subject: Subject line
        html_body: Rendered HTML

    Returns:
        True if SendGrid accepted the message
    """
    api_key = current_app.config.get('SENDGRID_API_KEY')
    if not api_key:
        logger.info(f'SendGrid not configured, e-mail to {to_email} skipped: {subject}')
        return False

    if not to_email:
        return False

    message = Mail(
        from_email=Email(current_app.config['MAIL_FROM_ADDRESS'], current_app.config['MAIL_FROM_NAME']),
        to_emails=To(to_email),
        subject=subject,
        html_content=html_body
    )

    try:
        response = SendGridAPIClient(api_key=api_key).send(message)
    except HTTPError as e:
        logger.error(f'SendGrid rejected e-mail to {to_email}: {e}', exc_info=True)
        return False
    except OSError as e:
        logger.error(f'SendGrid unreachable for e-mail to {to_email}: {e}', exc_info=True)
        return False

    logger.info(f'E-mail sent to {to_email} ({response.status_code}): {subject}')
    return 200 <= response.status_code < 300


def _render(template: str, booking: dict, restaurant: dict, **context) -> str:
    return render_template(
        f'emails/{template}',
        booking=booking,
        restaurant=restaurant,
        date_label=format_date(booking['date']),
        guests_label=guests_label(booking),
        status_label=MESSAGES.get(f'status_{booking["status"]}', booking['status']),
        app_name=current_app.config.get('APP_NAME', 'ResaTable'),
        base_url=current_app.config['PUBLIC_BASE_URL'],
        **context
    )


# =============================================================================
# GUEST E-MAILS
# =============================================================================

def send_booking_received(booking: dict, restaurant: dict) -> bool:
    """Acknowledge a public booking request (pending or waiting list)."""
    if booking['status'] == 'waiting':
        subject = f'Liste d\'attente - {restaurant["name"]}'
    else:
        subject = f'Réservation en attente - {restaurant["name"]}'
    html = _render('booking_received.html', booking, restaurant,
                   cancel_url=build_cancel_url(booking['cancel_token']))
    return send_email(booking['email'], subject, html)


def send_booking_confirmed(booking: dict, restaurant: dict) -> bool:
    """Tell the guest the restaurant confirmed the booking."""
    html = _render('booking_confirmed.html', booking, restaurant,
                   cancel_url=build_cancel_url(booking['cancel_token']))
    return send_email(booking['email'], f'Votre réservation est confirmée - {restaurant["name"]}', html)


def send_booking_waiting(booking: dict, restaurant: dict) -> bool:
    """Tell the guest the booking moved to the waiting list."""
    html = _render('booking_waiting.html', booking, restaurant,
                   cancel_url=build_cancel_url(booking['cancel_token']))
    return send_email(
        booking['email'], f'Votre réservation est en liste d\'attente - {restaurant["name"]}', html
    )


def send_booking_cancelled(booking: dict, restaurant: dict) -> bool:
    """Tell the guest the booking was cancelled or refused, with a rebooking link."""
    html = _render('booking_cancelled.html', booking, restaurant,
                   rebook_url=build_restaurant_url(restaurant['id']))
    return send_email(
        booking['email'], f'Information concernant votre réservation - {restaurant["name"]}', html
    )


def send_booking_reminder(booking: dict, restaurant: dict) -> bool:
    """Remind the guest of tomorrow's booking."""
    html = _render('booking_reminder.html', booking, restaurant,
                   cancel_url=build_cancel_url(booking['cancel_token']))
    return send_email(
        booking['email'], f'Rappel - Votre réservation demain chez {restaurant["name"]}', html
    )


STATUS_EMAILS = {
    'confirmed': send_booking_confirmed,
    'waiting': send_booking_waiting,
    'refused': send_booking_cancelled,
    'cancelled': send_booking_cancelled,
}


def send_status_email(booking: dict, restaurant: dict) -> bool:
    """
    Send the guest e-mail matching the booking's new status.

    Returns:
        True if an e-mail was sent
    """
    sender = STATUS_EMAILS.get(booking['status'])
    if sender is None or not booking.get('email'):
        return False
    return sender(booking, restaurant)


# =============================================================================
# RESTAURANT E-MAILS
# =============================================================================

def send_restaurant_notification(booking: dict, restaurant: dict) -> bool:
    """
    Notify the restaurant of a new public booking.

    The e-mail carries signed accept / refuse / waiting-list links.
    Skipped when the restaurant has no public e-mail.
    """
    if not restaurant.get('public_email'):
        return False

    html = _render(
        'restaurant_new_booking.html', booking, restaurant,
        confirm_url=build_action_url(booking['cancel_token'], 'confirm'),
        refuse_url=build_action_url(booking['cancel_token'], 'refuse'),
        waiting_url=build_action_url(booking['cancel_token'], 'waiting')
    )
    subject = f'Nouvelle réservation - {booking["first_name"]} {booking["last_name"]}'
    return send_email(restaurant['public_email'], subject, html)


def notify_new_booking(booking: dict, restaurant: dict) -> None:
    """Send the guest acknowledgement and the restaurant notification."""
    send_booking_received(booking, restaurant)
    send_restaurant_notification(booking, restaurant)


# =============================================================================
# REMINDERS
# =============================================================================

def send_booking_reminders(target_date: str = None) -> dict:
    """
    Send reminders for bookings of a date (tomorrow by default).

    Args:
        target_date: Date 'YYYY-MM-DD'

    Returns:
        Dict with 'date', 'total' and 'sent' counts
    """
    if target_date is None:
        target_date = (get_today() + timedelta(days=1)).isoformat()

    bookings = get_bookings_for_date(target_date)
    logger.info(f'Processing {len(bookings)} booking reminders for {target_date}')

    restaurants = {}
    sent = 0
    for booking in bookings:
        restaurant_id = booking['restaurant_id']
        if restaurant_id not in restaurants:
            restaurants[restaurant_id] = get_restaurant_by_id(restaurant_id)
        restaurant = restaurants[restaurant_id]
        if not restaurant:
            continue
        if send_booking_reminder(booking, restaurant):
            sent += 1

    return {'date': target_date, 'total': len(bookings), 'sent': sent}
