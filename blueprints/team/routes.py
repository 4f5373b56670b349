"""
Team routes.
Owners grant dashboard access to staff accounts.
"""

from flask import Blueprint, current_app

from blueprints.team.forms import TeamMemberForm
from models.team import get_team_members, add_team_member, remove_team_member
from utils.api_response import api_success, api_error, form_error
from utils.decorators import restaurant_access_required, restaurant_owner_required
from utils.helpers import get_json_payload, json_formdata
from utils.messages import MESSAGES

team_bp = Blueprint('team', __name__)


@team_bp.route('/restaurant/<int:restaurant_id>')
@restaurant_access_required()
def list_members(restaurant_id):
    """List team members."""
    return api_success(data=get_team_members(restaurant_id))


@team_bp.route('/restaurant/<int:restaurant_id>', methods=['POST'])
@restaurant_owner_required()
def add_member(restaurant_id):
    """
    Add a team member.

    Request body:
        email, password (required); role (default 'staff'); first_name, last_name
    """
    payload = get_json_payload()
    if not payload.get('email'):
        return api_error(MESSAGES['team_email_required'])
    if not payload.get('password'):
        return api_error(MESSAGES['team_password_required'])

    form = TeamMemberForm(formdata=json_formdata(payload))
    if not form.validate():
        return form_error(form)

    try:
        member = add_team_member(
            restaurant_id,
            form.email.data,
            form.password.data,
            role=form.role.data or 'staff',
            first_name=form.first_name.data,
            last_name=form.last_name.data
        )
    except ValueError:
        return api_error(MESSAGES['team_member_exists'])

    current_app.logger.info(f'User {member["user_id"]} added to restaurant {restaurant_id} team')
    return api_success(data=member, message=MESSAGES['team_member_added'], status=201)


@team_bp.route('/restaurant/<int:restaurant_id>/user/<int:user_id>', methods=['DELETE'])
@restaurant_owner_required()
def remove_member(restaurant_id, user_id):
    """Remove a user from this restaurant's team."""
    if not remove_team_member(restaurant_id, user_id):
        return api_error(MESSAGES['team_member_not_found'], status=404)

    return api_success(message=MESSAGES['team_member_removed'])
