"""
Authentication API routes
=========================

Email/password registration and login, logout, session status and Google
sign-in. Responses carry the safe user projection only.
"""

import logging

from flask import Blueprint, current_app, redirect, request, url_for
from flask_login import current_user, login_user, logout_user

from ...decorators import require_authenticated, require_guest
from ...extensions import get_oauth_service, get_user_store
from ...services.auth_service import SessionUser, login_with_google, login_with_password, to_safe_user
from ...services.service_base import AuthenticationError, ValidationError
from ...utils.errors import ServiceUnavailableError
from ...utils.validators import validate_login, validate_registration
from .common import api_error, api_success, get_json_body, validation_error

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/status', methods=['GET'])
def status():
    """Whether the session is logged in, with the user when it is."""
    if current_user.is_authenticated:
        return {'authenticated': True, 'user': current_user.to_dict()}
    return {'authenticated': False, 'user': None}


@auth_bp.route('/register', methods=['POST'])
@require_guest
def register():
    """Create a password account and log it in."""
    result = validate_registration(get_json_body())
    if not result['valid']:
        return validation_error(result)

    fields = result['value']
    user = get_user_store().create_user(
        email=fields['email'],
        password=fields['password'],
        username=fields['username'],
        first_name=fields['first_name'],
        last_name=fields['last_name'],
    )
    session_user = SessionUser(to_safe_user(user))
    login_user(session_user)
    logger.info(f"Registered and logged in user {session_user.id}")
    return api_success(status=201, user=session_user.to_dict())


@auth_bp.route('/login', methods=['POST'])
@require_guest
def login():
    result = validate_login(get_json_body())
    if not result['valid']:
        return validation_error(result)

    session_user = login_with_password(get_user_store(), result['value']['email'], result['value']['password'])
    if session_user is None:
        return api_error("Invalid email or password", status=401)

    login_user(session_user)
    return api_success(user=session_user.to_dict())


@auth_bp.route('/logout', methods=['POST'])
@require_authenticated
def logout():
    logout_user()
    return api_success()


# ============================================================================
# GOOGLE OAUTH
# ============================================================================

def _configured_oauth_service():
    oauth = get_oauth_service()
    if oauth is None or not oauth.is_configured:
        raise ServiceUnavailableError("Google authentication is not configured")
    return oauth


def _frontend_redirect(outcome: str):
    base = current_app.config.get('FRONTEND_URL') or '/'
    separator = '&' if '?' in base else '?'
    return redirect(f"{base}{separator}auth={outcome}")


@auth_bp.route('/google', methods=['GET'])
def google_login():
    """Redirect to the Google consent screen."""
    oauth = _configured_oauth_service()
    url, _ = oauth.authorization_url(url_for('.google_callback', _external=True))
    return redirect(url)


@auth_bp.route('/google/callback', methods=['GET'])
def google_callback():
    """Finish Google sign-in and send the browser back to the client."""
    oauth = _configured_oauth_service()

    if request.args.get('error'):
        logger.info(f"Google sign-in declined: {request.args.get('error')}")
        return _frontend_redirect('failed')

    try:
        profile = oauth.fetch_profile(request.url, url_for('.google_callback', _external=True))
        session_user = login_with_google(get_user_store(), profile)
    except (AuthenticationError, ValidationError) as e:
        logger.warning(f"Google sign-in failed: {e}")
        return _frontend_redirect('failed')

    login_user(session_user)
    logger.info(f"Google sign-in for user {session_user.id}")
    return _frontend_redirect('success')
