"""
Closed day routes.
Dates (or single services) on which a restaurant takes no bookings.
"""

from flask import Blueprint, request, current_app
from flask_login import login_required

from blueprints.closed_days.forms import ClosedDayForm
from models.closed_day import get_closed_days, get_closed_day_by_id, create_closed_day, delete_closed_day
from models.restaurant import get_restaurant_by_id
from utils.api_response import api_success, api_error, form_error
from utils.decorators import restaurant_access_required
from utils.helpers import get_json_payload, json_formdata
from utils.messages import MESSAGES
from utils.permissions import can_access_restaurant

closed_days_bp = Blueprint('closed_days', __name__)


@closed_days_bp.route('/restaurant/<int:restaurant_id>')
@restaurant_access_required()
def list_for_restaurant(restaurant_id):
    """
    List closed days.

    Query params:
        year: Limit to a year (optional)
        month: Limit to a month 1-12, with year (optional)
    """
    year = request.args.get('year', type=int)
    month = request.args.get('month', type=int)

    closed_days = get_closed_days(restaurant_id)
    if year:
        prefix = f'{year:04d}-{month:02d}-' if month else f'{year:04d}-'
        closed_days = [day for day in closed_days if day['date'].startswith(prefix)]

    return api_success(data=closed_days)


@closed_days_bp.route('/restaurant/<int:restaurant_id>', methods=['POST'])
@restaurant_access_required()
def create(restaurant_id):
    """
    Add a closed day.

    Request body:
        date: 'YYYY-MM-DD' (required)
        service: 'all' (default), 'lunch' or 'dinner'
        reason: Optional note
    """
    payload = get_json_payload()
    if not payload.get('date'):
        return api_error(MESSAGES['date_required'])

    form = ClosedDayForm(formdata=json_formdata(payload))
    if not form.validate():
        return form_error(form)

    try:
        closed_day_id = create_closed_day(
            restaurant_id, form.date.data, form.service.data or 'all', form.reason.data
        )
    except ValueError:
        return api_error(MESSAGES['closed_day_exists'])

    current_app.logger.info(f'Restaurant {restaurant_id} closed on {form.date.data} ({form.service.data or "all"})')
    return api_success(
        data=get_closed_day_by_id(closed_day_id),
        message=MESSAGES['closed_day_created'],
        status=201
    )


@closed_days_bp.route('/<int:closed_day_id>', methods=['DELETE'])
@login_required
def delete(closed_day_id):
    """Remove a closed day."""
    closed_day = get_closed_day_by_id(closed_day_id)
    if not closed_day:
        return api_error(MESSAGES['closed_day_not_found'], status=404)

    restaurant = get_restaurant_by_id(closed_day['restaurant_id'])
    if not restaurant or not can_access_restaurant(restaurant):
        return api_error(MESSAGES['restaurant_forbidden'], status=403)

    delete_closed_day(closed_day_id)
    return api_success(message=MESSAGES['closed_day_deleted'])
