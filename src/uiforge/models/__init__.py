"""
Database Models for UI Forge

Models include:
- User: account record for password and Google OAuth sign-in
"""

from __future__ import annotations

from ..extensions import db
from .user import User, hash_password, verify_password_hash
from ..utils.time import utc_now

__all__ = [
    'db',
    'User',
    'hash_password',
    'verify_password_hash',
    'utc_now',
]
