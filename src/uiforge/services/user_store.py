"""
User Store
==========

Persistence of user accounts behind a small interface with two
implementations:

- ``SQLAlchemyUserStore``: Flask-SQLAlchemy backed, used by the app.
- ``InMemoryUserStore``: dict keyed by id, used as a test double. Not
  thread-safe.

Both enforce email and username uniqueness, hash passwords with bcrypt and
merge Google sign-ins into existing accounts by email.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from ..constants import BCRYPT_ROUNDS
from ..extensions import db
from ..models import User, hash_password, verify_password_hash
from ..utils.time import utc_now
from ..utils.validators import PROFILE_FIELDS
from .service_base import DuplicateEmailError, DuplicateUsernameError

logger = logging.getLogger(__name__)

# Attributes update_user may touch; identity and hash fields are excluded
UPDATABLE_FIELDS = frozenset(PROFILE_FIELDS) | {'email_verified', 'avatar', 'google_id'}


class UserStore(ABC):
    """Interface for user account persistence."""

    def __init__(self, bcrypt_rounds: int = BCRYPT_ROUNDS):
        self.bcrypt_rounds = bcrypt_rounds

    @abstractmethod
    def get_user(self, user_id: Any) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_email(self, email: Optional[str]) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: Optional[str]) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_google_id(self, google_id: Optional[str]) -> Optional[User]:
        ...

    @abstractmethod
    def _add(self, user: User) -> User:
        """Persist a new record and return it with an id assigned."""

    @abstractmethod
    def _save(self, user: User) -> User:
        """Persist changes to an existing record."""

    # ------------------------------------------------------------------
    # Shared behaviour
    # ------------------------------------------------------------------

    def create_user(self, email: str, password: str, username: Optional[str] = None,
                    first_name: Optional[str] = None, last_name: Optional[str] = None) -> User:
        """
        Register a password user.

        Raises:
            DuplicateEmailError: the email is already registered
            DuplicateUsernameError: a non-empty username is already taken
        """
        if self.get_user_by_email(email):
            raise DuplicateEmailError()
        if username and self.get_user_by_username(username):
            raise DuplicateUsernameError()

        now = utc_now()
        user = User(
            email=email,
            username=username or None,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            email_verified=False,
            first_name=first_name,
            last_name=last_name,
            created_at=now,
            updated_at=now,
        )
        user = self._add(user)
        logger.info(f"Created user {user.id} ({email})")
        return user

    def create_oauth_user(self, email: str, google_id: Optional[str] = None,
                          first_name: Optional[str] = None, last_name: Optional[str] = None,
                          avatar: Optional[str] = None, email_verified: bool = True) -> User:
        """
        Create or merge a Google sign-in.

        An existing account with the same email is linked (when it has no
        Google id yet) and returned. Repeating the call with the same
        identity returns the same record.
        """
        existing = self.get_user_by_email(email)
        if existing is not None:
            if not existing.google_id and google_id:
                existing.google_id = google_id
                existing.updated_at = utc_now()
                existing = self._save(existing)
                logger.info(f"Linked Google account to existing user {existing.id}")
            return existing

        if google_id:
            by_google = self.get_user_by_google_id(google_id)
            if by_google is not None:
                return by_google

        now = utc_now()
        user = User(
            email=email,
            google_id=google_id,
            password_hash=None,
            email_verified=email_verified,
            first_name=first_name,
            last_name=last_name,
            avatar=avatar,
            created_at=now,
            updated_at=now,
        )
        user = self._add(user)
        logger.info(f"Created OAuth user {user.id} ({email})")
        return user

    def update_user(self, user_id: Any, **fields: Any) -> Optional[User]:
        user = self.get_user(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            if key not in UPDATABLE_FIELDS:
                raise ValueError(f"Field '{key}' cannot be updated")
            setattr(user, key, value)
        user.updated_at = utc_now()
        return self._save(user)

    def update_profile(self, user_id: Any, **profile_fields: Any) -> Optional[User]:
        """Update profile fields; a username change must stay unique."""
        user = self.get_user(user_id)
        if user is None:
            return None

        fields = {k: v for k, v in profile_fields.items() if k in PROFILE_FIELDS}
        new_username = fields.get('username')
        if new_username and new_username != user.username:
            other = self.get_user_by_username(new_username)
            if other is not None and other.id != user.id:
                raise DuplicateUsernameError()

        return self.update_user(user_id, **fields)

    def verify_password(self, email: Optional[str], password: Optional[str]) -> Optional[User]:
        """The matching user, or None for unknown email, OAuth-only account or wrong password."""
        user = self.get_user_by_email(email)
        if user is None or not user.password_hash:
            return None
        if not verify_password_hash(password, user.password_hash):
            return None
        return user

    def link_google_account(self, user_id: Any, google_id: str) -> Optional[User]:
        return self.update_user(user_id, google_id=google_id)


class SQLAlchemyUserStore(UserStore):
    """User store on the application database."""

    def get_user(self, user_id: Any) -> Optional[User]:
        try:
            return db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None

    def get_user_by_email(self, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        return User.query.filter_by(email=email).first()

    def get_user_by_username(self, username: Optional[str]) -> Optional[User]:
        if not username:
            return None
        return User.query.filter_by(username=username).first()

    def get_user_by_google_id(self, google_id: Optional[str]) -> Optional[User]:
        if not google_id:
            return None
        return User.query.filter_by(google_id=google_id).first()

    def _add(self, user: User) -> User:
        db.session.add(user)
        return self._commit(user)

    def _save(self, user: User) -> User:
        return self._commit(user)

    def _commit(self, user: User) -> User:
        try:
            db.session.commit()
        except IntegrityError as e:
            # Lost a uniqueness race with a concurrent request
            db.session.rollback()
            logger.warning(f"Integrity error saving user {user.email}: {e.orig}")
            if 'username' in str(e.orig):
                raise DuplicateUsernameError() from e
            raise DuplicateEmailError() from e
        return user


class InMemoryUserStore(UserStore):
    """Dict-backed store; records are transient ``User`` instances."""

    def __init__(self, bcrypt_rounds: int = BCRYPT_ROUNDS):
        super().__init__(bcrypt_rounds)
        self._users: Dict[int, User] = {}
        self._ids = itertools.count(1)

    def get_user(self, user_id: Any) -> Optional[User]:
        try:
            return self._users.get(int(user_id))
        except (TypeError, ValueError):
            return None

    def _find(self, attr: str, value: Optional[str]) -> Optional[User]:
        if not value:
            return None
        return next((u for u in self._users.values() if getattr(u, attr) == value), None)

    def get_user_by_email(self, email: Optional[str]) -> Optional[User]:
        return self._find('email', email)

    def get_user_by_username(self, username: Optional[str]) -> Optional[User]:
        return self._find('username', username)

    def get_user_by_google_id(self, google_id: Optional[str]) -> Optional[User]:
        return self._find('google_id', google_id)

    def _add(self, user: User) -> User:
        user.id = next(self._ids)
        self._users[user.id] = user
        return user

    def _save(self, user: User) -> User:
        self._users[user.id] = user
        return user

    def __len__(self) -> int:
        return len(self._users)


def create_user_store(config: Dict[str, Any]) -> UserStore:
    """Build the store selected by ``USER_STORE`` ('database' or 'memory')."""
    rounds = int(config.get('BCRYPT_LOG_ROUNDS', BCRYPT_ROUNDS))
    kind = (config.get('USER_STORE') or 'database').lower()
    if kind == 'memory':
        logger.warning("Using in-memory user store; accounts are lost on restart")
        return InMemoryUserStore(bcrypt_rounds=rounds)
    return SQLAlchemyUserStore(bcrypt_rounds=rounds)
