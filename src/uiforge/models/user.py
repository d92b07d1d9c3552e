"""
User Model for Authentication
==============================

Handles user accounts for both password and Google OAuth sign-in.
"""

from typing import Optional

import bcrypt

from ..constants import BCRYPT_ROUNDS
from ..extensions import db
from ..utils.time import utc_now


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plaintext password with bcrypt."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def verify_password_hash(password: str, password_hash: Optional[str]) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not password_hash or password is None:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class User(db.Model):
    """
    User account.

    A user signs in with a password, a linked Google account, or both.
    ``password_hash`` and ``google_id`` never leave the server; see
    ``uiforge.services.auth_service.to_safe_user``.
    """

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    username = db.Column(db.String(80), unique=True, nullable=True, index=True)
    password_hash = db.Column(db.String(255), nullable=True)
    email_verified = db.Column(db.Boolean, default=False, nullable=False)

    # OAuth
    google_id = db.Column(db.String(255), unique=True, nullable=True, index=True)

    # Profile
    first_name = db.Column(db.String(120))
    last_name = db.Column(db.String(120))
    avatar = db.Column(db.String(500))
    age = db.Column(db.Integer)
    date_of_birth = db.Column(db.String(32))
    bio = db.Column(db.Text)

    created_at = db.Column(db.DateTime(timezone=True), default=utc_now)
    updated_at = db.Column(db.DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash; False for OAuth-only users."""
        return verify_password_hash(password, self.password_hash)

    def __repr__(self) -> str:
        return f'<User {self.email}>'
