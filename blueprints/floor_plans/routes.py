"""
Floor plan routes.
The seating layout is stored as one JSON document per restaurant.
"""

from flask import Blueprint

from models.floor_plan import get_floor_plan, save_floor_plan, empty_plan
from utils.api_response import api_success, api_error
from utils.decorators import restaurant_access_required
from utils.helpers import get_json_payload
from utils.messages import MESSAGES

floor_plans_bp = Blueprint('floor_plans', __name__)


@floor_plans_bp.route('/restaurant/<int:restaurant_id>')
@restaurant_access_required()
def get_plan(restaurant_id):
    """Saved floor plan, or an empty plan."""
    return api_success(data=get_floor_plan(restaurant_id) or empty_plan())


@floor_plans_bp.route('/restaurant/<int:restaurant_id>', methods=['PUT'])
@restaurant_access_required()
def save_plan(restaurant_id):
    """
    Save the floor plan.

    Request body:
        {"zones": [...]} or {"plan": {"zones": [...]}}
    """
    data = get_json_payload()
    plan = data.get('plan', data)
    if not isinstance(plan, dict) or 'zones' not in plan:
        return api_error(MESSAGES['invalid_floor_plan'])

    try:
        saved = save_floor_plan(restaurant_id, plan)
    except ValueError as e:
        return api_error(str(e))

    return api_success(data=saved, message=MESSAGES['floor_plan_saved'])
