"""
Route Guards
============

Session guards for view functions. Both answer JSON so API clients get a
machine-readable reason.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from flask import jsonify
from flask_login import current_user

logger = logging.getLogger(__name__)

T = TypeVar('T')


def require_authenticated(func: Callable[..., T]) -> Callable[..., Any]:
    """Reject requests without a logged-in user (401)."""
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        if not current_user.is_authenticated:
            return jsonify({'error': 'Authentication required'}), 401
        return func(*args, **kwargs)
    return wrapper


def require_guest(func: Callable[..., T]) -> Callable[..., Any]:
    """Reject requests from an already logged-in user (400)."""
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        if current_user.is_authenticated:
            logger.debug(f"Guest-only endpoint hit by user {current_user.get_id()}")
            return jsonify({'error': 'Already authenticated'}), 400
        return func(*args, **kwargs)
    return wrapper
