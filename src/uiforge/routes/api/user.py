"""
User profile API routes
=======================
"""

from flask import Blueprint
from flask_login import current_user

from ...decorators import require_authenticated
from ...extensions import get_user_store
from ...services.auth_service import to_safe_user
from ...services.service_base import NotFoundError
from ...utils.validators import validate_profile_update
from .common import api_success, get_json_body, validation_error

user_bp = Blueprint('user', __name__, url_prefix='/user')


@user_bp.route('/profile', methods=['GET'])
@require_authenticated
def get_profile():
    user = get_user_store().get_user(current_user.get_id())
    if user is None:
        raise NotFoundError("User not found")
    return api_success(profile=to_safe_user(user))


@user_bp.route('/profile', methods=['PUT'])
@require_authenticated
def update_profile():
    """Update profile fields (camelCase on the wire)."""
    result = validate_profile_update(get_json_body())
    if not result['valid']:
        return validation_error(result)

    user = get_user_store().update_profile(current_user.get_id(), **result['value'])
    if user is None:
        raise NotFoundError("User not found")
    return api_success(profile=to_safe_user(user))
