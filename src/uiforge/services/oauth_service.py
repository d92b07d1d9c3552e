"""
Google OAuth Service
====================

Authorization-code flow against Google using ``requests-oauthlib``. The
service builds the provider redirect, keeps the anti-forgery ``state`` in
the Flask session and exchanges the callback code for the OpenID profile.
"""

import logging
import os
from typing import Any, Dict, Optional, Tuple

import requests
from flask import session
from oauthlib.oauth2.rfc6749.errors import OAuth2Error
from requests_oauthlib import OAuth2Session

from .service_base import AuthenticationError

logger = logging.getLogger(__name__)

AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = ["openid", "email", "profile"]

STATE_SESSION_KEY = "oauth_state"


class GoogleOAuthService:
    """Google sign-in; disabled unless client id and secret are configured."""

    def __init__(self, client_id: Optional[str], client_secret: Optional[str],
                 redirect_uri: Optional[str] = None, timeout: int = 30):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _session(self, redirect_uri: str, state: Optional[str] = None) -> OAuth2Session:
        return OAuth2Session(self.client_id, scope=SCOPES, redirect_uri=redirect_uri, state=state)

    def authorization_url(self, redirect_uri: str) -> Tuple[str, str]:
        """Provider URL to redirect to; the state is remembered in the session."""
        oauth = self._session(self.redirect_uri or redirect_uri)
        url, state = oauth.authorization_url(AUTHORIZATION_URL, access_type="online", prompt="select_account")
        session[STATE_SESSION_KEY] = state
        return url, state

    def fetch_profile(self, authorization_response: str, redirect_uri: str) -> Dict[str, Any]:
        """
        Exchange the callback for the user's OpenID profile.

        Raises:
            AuthenticationError: state mismatch or provider failure
        """
        state = session.pop(STATE_SESSION_KEY, None)
        if not state:
            raise AuthenticationError("OAuth state missing from session")

        # Local development callbacks arrive over plain http
        if authorization_response.startswith('http://'):
            os.environ.setdefault('OAUTHLIB_INSECURE_TRANSPORT', '1')

        oauth = self._session(self.redirect_uri or redirect_uri, state=state)
        try:
            oauth.fetch_token(
                TOKEN_URL,
                client_secret=self.client_secret,
                authorization_response=authorization_response,
                timeout=self.timeout,
            )
            response = oauth.get(USERINFO_URL, timeout=self.timeout)
        except (OAuth2Error, requests.RequestException, ValueError) as e:
            logger.warning(f"Google token exchange failed: {e}")
            raise AuthenticationError(f"Google sign-in failed: {e}") from e

        if response.status_code != 200:
            raise AuthenticationError(f"Google userinfo request failed (status {response.status_code})")
        return response.json()


def create_oauth_service(config: Dict[str, Any]) -> GoogleOAuthService:
    service = GoogleOAuthService(
        client_id=config.get('GOOGLE_CLIENT_ID'),
        client_secret=config.get('GOOGLE_CLIENT_SECRET'),
        redirect_uri=config.get('GOOGLE_REDIRECT_URI'),
    )
    if not service.is_configured:
        logger.warning("Google OAuth not configured; set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET to enable it")
    return service
