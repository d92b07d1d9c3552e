"""
Authentication Service
======================

Session-facing view of user accounts. Anything handed to the client or kept
in the login session goes through ``to_safe_user`` so the password hash and
the Google id never leave the server.
"""

import logging
from typing import Any, Dict, Optional

from flask_login import UserMixin

from ..utils.time import isoformat_or_none
from .service_base import ValidationError
from .user_store import UserStore

logger = logging.getLogger(__name__)


def to_safe_user(user: Any) -> Dict[str, Any]:
    """Project a user record onto its client-safe fields."""
    return {
        "id": user.id,
        "email": user.email,
        "username": user.username,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "emailVerified": bool(user.email_verified),
        "avatar": user.avatar,
        "age": user.age,
        "dateOfBirth": user.date_of_birth,
        "bio": user.bio,
        "createdAt": isoformat_or_none(user.created_at),
        "updatedAt": isoformat_or_none(user.updated_at),
    }


class SessionUser(UserMixin):
    """Flask-Login user built from a safe projection."""

    def __init__(self, profile: Dict[str, Any]):
        self.profile = profile
        self.id = profile['id']

    @property
    def email(self) -> str:
        return self.profile['email']

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.profile)

    def __repr__(self) -> str:
        return f'<SessionUser {self.id}>'


def serialize_user(user: Any) -> str:
    """Session key for a user (Flask-Login stores ids as strings)."""
    return str(user.id)


def deserialize_user(store: UserStore, user_id: Any) -> Optional[SessionUser]:
    """Re-fetch the user behind a session id; None when it no longer resolves."""
    user = store.get_user(user_id)
    if user is None:
        return None
    return SessionUser(to_safe_user(user))


def login_with_password(store: UserStore, email: str, password: str) -> Optional[SessionUser]:
    user = store.verify_password(email, password)
    if user is None:
        logger.info(f"Failed password login for {email}")
        return None
    return SessionUser(to_safe_user(user))


def login_with_google(store: UserStore, profile: Dict[str, Any]) -> SessionUser:
    """
    Resolve a Google profile to a local account.

    Looks up by Google id first, then by email (linking an unlinked
    account), and creates a new account otherwise.

    Raises:
        ValidationError: the profile carries no email address
    """
    email = (profile.get('email') or '').strip().lower()
    if not email:
        raise ValidationError("Google account has no email address")

    google_id = profile.get('sub') or profile.get('id')
    google_id = str(google_id) if google_id else None
    user = store.get_user_by_google_id(google_id) if google_id else None
    if user is None:
        user = store.create_oauth_user(
            email=email,
            google_id=google_id,
            first_name=profile.get('given_name'),
            last_name=profile.get('family_name'),
            avatar=profile.get('picture'),
            email_verified=bool(profile.get('email_verified', True)),
        )
    return SessionUser(to_safe_user(user))
