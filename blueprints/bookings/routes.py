"""
Booking routes.
Public booking requests, dashboard management, guest and restaurant e-mail links,
notifications, statistics and export.
"""

from flask import Blueprint, Response, current_app, render_template, request
from flask_login import login_required, current_user

from blueprints.bookings.forms import PublicBookingForm, OwnerBookingForm
from blueprints.bookings.services import (
    create_public_booking, create_owner_booking, notify_new_booking, send_status_email,
    verify_action_signature, build_bookings_workbook, BOOKING_ACTIONS
)
from models.booking import (
    BOOKING_STATUSES, get_booking_by_id, get_booking_by_token, get_bookings_by_restaurant,
    get_bookings_for_month, update_booking_status, mark_arrival, mark_bill_requested,
    mark_departure, assign_table, get_notifications, mark_notifications_read,
    compute_monthly_stats, previous_month
)
from models.client import record_client_spending
from models.floor_plan import table_exists
from models.restaurant import (
    get_restaurant_by_id, get_public_restaurant, get_restaurants_for_user, get_effective_capacity
)
from utils.api_response import api_success, api_error, form_error
from utils.datetime_helpers import get_today, get_current_hhmm
from utils.decorators import restaurant_access_required
from utils.helpers import (
    get_client_ip, generate_client_id, get_json_payload, json_formdata
)
from utils.messages import MESSAGES
from utils.permissions import can_access_restaurant
from utils.validators import validate_date_format, parse_month, parse_amount

bookings_bp = Blueprint('bookings', __name__)


def _load_staff_booking(booking_id: int):
    """
    Load a booking the current user may manage.

    Returns:
        Tuple (booking, restaurant, None) or (None, None, error_response)
    """
    booking = get_booking_by_id(booking_id)
    if not booking:
        return None, None, api_error(MESSAGES['booking_not_found'], status=404)

    restaurant = get_restaurant_by_id(booking['restaurant_id'])
    if not restaurant:
        return None, None, api_error(MESSAGES['restaurant_not_found'], status=404)

    if not can_access_restaurant(restaurant):
        return None, None, api_error(MESSAGES['restaurant_forbidden'], status=403)

    return booking, restaurant, None


def _accessible_restaurant_ids() -> list:
    return [restaurant['id'] for restaurant in get_restaurants_for_user(current_user.id)]


def _result_page(title: str, message: str, status: int = 200, success: bool = True):
    """HTML page shown after clicking an e-mail link."""
    return render_template(
        'bookings/action_result.html',
        title=title,
        message=message,
        success=success,
        app_name=current_app.config.get('APP_NAME', 'ResaTable')
    ), status


# =============================================================================
# CREATE
# =============================================================================

@bookings_bp.route('', methods=['POST'])
def create_public():
    """
    Submit a booking request from the public restaurant page.

    Request body:
        restaurant_id, date, time, guests, children, first_name, last_name,
        email, phone, special_request, newsletter
    """
    form = PublicBookingForm(formdata=json_formdata(get_json_payload()))
    if not form.validate():
        return form_error(form)

    restaurant = get_public_restaurant(form.restaurant_id.data)
    if not restaurant:
        return api_error(MESSAGES['restaurant_not_found'], status=404)

    cookie_name = current_app.config['CLIENT_ID_COOKIE']
    client_id = request.cookies.get(cookie_name)
    new_client_id = client_id is None
    if new_client_id:
        client_id = generate_client_id()

    try:
        booking = create_public_booking(restaurant, form.data, get_client_ip(), client_id)
    except ValueError as e:
        return api_error(str(e))

    notify_new_booking(booking, restaurant)

    response, status = api_success(data=booking, message=MESSAGES['booking_created'], status=201)
    if new_client_id:
        response.set_cookie(
            cookie_name,
            client_id,
            max_age=current_app.config['CLIENT_ID_COOKIE_MAX_AGE'],
            httponly=True,
            secure=current_app.config.get('SESSION_COOKIE_SECURE', False),
            samesite='Strict'
        )
    return response, status


@bookings_bp.route('/owner', methods=['POST'])
@login_required
def create_owner():
    """
    Create a booking from the dashboard.

    Request body:
        restaurant_id, date, time, guests, first_name, last_name (required);
        children, email, phone, special_request, status, table_id, zone_id
    """
    payload = get_json_payload()
    required = ('restaurant_id', 'date', 'time', 'guests', 'first_name', 'last_name')
    if any(not payload.get(field) for field in required):
        return api_error(MESSAGES['owner_booking_missing_fields'])

    form = OwnerBookingForm(formdata=json_formdata(payload))
    if not form.validate():
        return form_error(form)

    restaurant = get_restaurant_by_id(form.restaurant_id.data)
    if not restaurant:
        return api_error(MESSAGES['restaurant_not_found'], status=404)
    if not can_access_restaurant(restaurant):
        return api_error(MESSAGES['restaurant_forbidden'], status=403)

    try:
        booking = create_owner_booking(restaurant, form.data, current_user.id)
    except ValueError as e:
        return api_error(str(e))

    return api_success(data=booking, message=MESSAGES['booking_created'], status=201)


# =============================================================================
# DASHBOARD
# =============================================================================

@bookings_bp.route('/restaurant/<int:restaurant_id>')
@restaurant_access_required()
def list_for_restaurant(restaurant_id):
    """
    List bookings of a restaurant.

    Query params:
        date: YYYY-MM-DD (optional)
        month: YYYY-MM (optional)
        status: Booking status (optional)
    """
    date_str = request.args.get('date')
    if date_str and not validate_date_format(date_str):
        return api_error(MESSAGES['invalid_date'])

    month = None
    if request.args.get('month'):
        month = parse_month(request.args['month'])
        if month is None:
            return api_error(MESSAGES['invalid_month'])

    status = request.args.get('status')
    if status and status not in BOOKING_STATUSES:
        return api_error(MESSAGES['invalid_status'])

    bookings = get_bookings_by_restaurant(restaurant_id, date=date_str, month=month, status=status)
    return api_success(data=bookings)


@bookings_bp.route('/<int:booking_id>/status', methods=['PATCH'])
@login_required
def update_status(booking_id):
    """Change the status of a booking and e-mail the guest."""
    status = get_json_payload().get('status')
    if status not in BOOKING_STATUSES:
        return api_error(MESSAGES['invalid_status'])

    booking, restaurant, error = _load_staff_booking(booking_id)
    if error:
        return error

    updated = update_booking_status(booking_id, status)
    if status != booking['status']:
        send_status_email(updated, restaurant)

    return api_success(data=updated, message=MESSAGES['booking_updated'])


@bookings_bp.route('/<int:booking_id>/arrival', methods=['PATCH'])
@login_required
def arrival(booking_id):
    """Stamp the arrival time."""
    booking, restaurant, error = _load_staff_booking(booking_id)
    if error:
        return error

    return api_success(data=mark_arrival(booking_id, get_current_hhmm()))


@bookings_bp.route('/<int:booking_id>/bill-requested', methods=['PATCH'])
@login_required
def bill_requested(booking_id):
    """Flag the bill as requested."""
    booking, restaurant, error = _load_staff_booking(booking_id)
    if error:
        return error

    return api_success(data=mark_bill_requested(booking_id, True))


@bookings_bp.route('/<int:booking_id>/departure', methods=['PATCH'])
@login_required
def departure(booking_id):
    """
    Stamp the departure time, optionally with the bill amount.

    Request body:
        bill_amount: Amount >= 0 (optional); added to the client's totals
    """
    booking, restaurant, error = _load_staff_booking(booking_id)
    if error:
        return error

    raw_amount = get_json_payload().get('bill_amount')
    bill_amount = None
    if raw_amount not in (None, ''):
        bill_amount = parse_amount(raw_amount)
        if bill_amount is None:
            return api_error(MESSAGES['invalid_bill_amount'])

    updated = mark_departure(booking_id, get_current_hhmm(), bill_amount)

    if bill_amount is not None and booking.get('email'):
        record_client_spending(booking['restaurant_id'], booking['email'], bill_amount)

    return api_success(data=updated)


@bookings_bp.route('/<int:booking_id>/table', methods=['PATCH'])
@login_required
def table(booking_id):
    """
    Assign a floor-plan table.

    Request body:
        table_id, zone_id (null clears the assignment)
    """
    booking, restaurant, error = _load_staff_booking(booking_id)
    if error:
        return error

    data = get_json_payload()
    table_id = data.get('table_id')
    if table_id and not table_exists(restaurant['id'], table_id):
        return api_error(MESSAGES['table_not_in_floor_plan'])

    updated = assign_table(
        booking_id,
        str(table_id) if table_id else None,
        str(data['zone_id']) if data.get('zone_id') else None
    )
    return api_success(data=updated)


# =============================================================================
# E-MAIL LINKS
# =============================================================================

@bookings_bp.route('/cancel/<token>')
def cancel(token):
    """Guest self-cancellation from the e-mail link."""
    booking = get_booking_by_token(token)
    if not booking:
        return _result_page('Réservation introuvable', MESSAGES['booking_not_found'], 404, success=False)

    if booking['status'] == 'cancelled':
        return _result_page('Réservation annulée', MESSAGES['booking_already_cancelled'], 400, success=False)

    updated = update_booking_status(booking['id'], 'cancelled')
    restaurant = get_restaurant_by_id(booking['restaurant_id'])
    if restaurant:
        send_status_email(updated, restaurant)

    current_app.logger.info(f'Booking {booking["id"]} cancelled by guest')
    return _result_page('Réservation annulée', MESSAGES['booking_cancelled'])


@bookings_bp.route('/action/<token>/<action>')
def email_action(token, action):
    """
    Restaurant decision from the signed e-mail link.

    Query params:
        sig: HMAC signature of the token and action
    """
    if action not in BOOKING_ACTIONS:
        return _result_page('Action invalide', MESSAGES['invalid_action'], 400, success=False)

    if not verify_action_signature(token, action, request.args.get('sig', '')):
        current_app.logger.warning(f'Invalid action signature for {action}')
        return _result_page('Lien invalide', MESSAGES['invalid_signature'], 403, success=False)

    booking = get_booking_by_token(token)
    if not booking:
        return _result_page('Réservation introuvable', MESSAGES['booking_not_found'], 404, success=False)

    status = BOOKING_ACTIONS[action]
    updated = update_booking_status(booking['id'], status)
    restaurant = get_restaurant_by_id(booking['restaurant_id'])
    if restaurant and status != booking['status']:
        send_status_email(updated, restaurant)

    label = MESSAGES.get(f'status_{status}', status)
    return _result_page(
        'Réservation mise à jour',
        f'{booking["first_name"]} {booking["last_name"]}, {booking["date"]} {booking["time"]}: {label}'
    )


# =============================================================================
# NOTIFICATIONS
# =============================================================================

@bookings_bp.route('/notifications')
@login_required
def notifications():
    """
    Public-platform bookings of the user's restaurants, newest first.

    Query params:
        restaurant_id: Limit to one restaurant (optional)
        unread_only: 'true' to hide read notifications
    """
    restaurant_ids = _accessible_restaurant_ids()

    restaurant_id = request.args.get('restaurant_id', type=int)
    if restaurant_id is not None:
        restaurant_ids = [rid for rid in restaurant_ids if rid == restaurant_id]

    unread_only = request.args.get('unread_only', '').lower() in ('1', 'true', 'yes')
    result = get_notifications(current_user.id, restaurant_ids, unread_only=unread_only)

    return api_success(
        data=result['notifications'],
        unread_count=result['unread_count'],
        pending_count=result['pending_count']
    )


@bookings_bp.route('/notifications/read', methods=['POST'])
@login_required
def notifications_read():
    """
    Mark notifications as read.

    Request body:
        booking_ids: List of booking IDs; omitted or null marks everything
    """
    booking_ids = get_json_payload().get('booking_ids')
    if booking_ids is not None:
        if not isinstance(booking_ids, list):
            return api_error(MESSAGES['invalid_request'])
        try:
            booking_ids = [int(booking_id) for booking_id in booking_ids]
        except (TypeError, ValueError):
            return api_error(MESSAGES['invalid_id'])

    marked = mark_notifications_read(current_user.id, _accessible_restaurant_ids(), booking_ids)
    return api_success(data={'marked': marked}, message=MESSAGES['notifications_read'])


# =============================================================================
# STATISTICS & EXPORT
# =============================================================================

@bookings_bp.route('/stats')
@login_required
def stats():
    """
    Monthly statistics over the user's restaurants.

    Query params:
        restaurant_id: One restaurant (optional, default all accessible)
        month: YYYY-MM (optional, default current month)
        service: 'all', 'lunch' or 'dinner' (daily occupation filter)
    """
    restaurants = get_restaurants_for_user(current_user.id)

    restaurant_id = request.args.get('restaurant_id', type=int)
    if restaurant_id is not None:
        restaurant = get_restaurant_by_id(restaurant_id)
        if not restaurant:
            return api_error(MESSAGES['restaurant_not_found'], status=404)
        if not can_access_restaurant(restaurant):
            return api_error(MESSAGES['restaurant_forbidden'], status=403)
        restaurants = [restaurant]

    today = get_today()
    month_str = request.args.get('month') or today.strftime('%Y-%m')
    month = parse_month(month_str)
    if month is None:
        return api_error(MESSAGES['invalid_month'])

    service = request.args.get('service') or 'all'
    if service not in ('all', 'lunch', 'dinner'):
        return api_error(MESSAGES['invalid_service'])

    restaurant_ids = [r['id'] for r in restaurants]
    year, month_number = month
    prev_year, prev_month = previous_month(year, month_number)

    capacity = sum(get_effective_capacity(r) for r in restaurants) or current_app.config['DEFAULT_CAPACITY']

    result = compute_monthly_stats(
        get_bookings_for_month(restaurant_ids, year, month_number),
        get_bookings_for_month(restaurant_ids, prev_year, prev_month),
        year,
        month_number,
        capacity,
        service=None if service == 'all' else service,
        today=today
    )
    return api_success(data=result)


@bookings_bp.route('/restaurant/<int:restaurant_id>/export')
@restaurant_access_required()
def export(restaurant_id):
    """
    Download bookings as an Excel workbook.

    Query params:
        month: YYYY-MM (optional, default all bookings)
    """
    month = None
    if request.args.get('month'):
        month = parse_month(request.args['month'])
        if month is None:
            return api_error(MESSAGES['invalid_month'])

    restaurant = get_restaurant_by_id(restaurant_id)
    bookings = sorted(
        get_bookings_by_restaurant(restaurant_id, month=month),
        key=lambda b: (b['date'], b['time'])
    )
    period = request.args.get('month') or 'toutes'
    content = build_bookings_workbook(restaurant, bookings, period)

    filename = f'reservations_{restaurant_id}_{period}.xlsx'
    return Response(
        content,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )
