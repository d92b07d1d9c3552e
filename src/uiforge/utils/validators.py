"""
Validation Utilities

Provides validation functions for request payloads and uploaded files.
Each validator returns a result dict with ``valid``, ``errors`` and the
cleaned ``value`` so routes can report every problem at once.
"""

import re
from datetime import date
from typing import Any, Dict, Optional

from ..constants import MAX_UPLOAD_BYTES

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 8
MIN_USERNAME_LENGTH = 3

PROFILE_FIELDS = ('first_name', 'last_name', 'username', 'age', 'date_of_birth', 'bio')

# camelCase wire names -> model attribute names
_WIRE_TO_FIELD = {
    'firstName': 'first_name',
    'lastName': 'last_name',
    'dateOfBirth': 'date_of_birth',
}


def _result() -> Dict[str, Any]:
    return {'valid': False, 'errors': [], 'value': None}


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value.strip()


def validate_email(email: Any) -> Dict[str, Any]:
    """Validate email address format."""
    result = _result()
    email = _clean_str(email)
    if not email:
        result['errors'].append("Email is required")
    elif not EMAIL_RE.match(email):
        result['errors'].append("Invalid email address")
    else:
        result['value'] = email.lower()
        result['valid'] = True
    return result


def validate_registration(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a registration payload.

    Requires email and a password of at least 8 characters. Username, when
    present, must be at least 3 characters; first/last name, when present,
    must not be blank.
    """
    result = _result()
    errors = result['errors']

    email_result = validate_email(data.get('email'))
    errors.extend(email_result['errors'])

    password = data.get('password')
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    username = _clean_str(data.get('username'))
    if username is not None and username != '' and len(username) < MIN_USERNAME_LENGTH:
        errors.append(f"Username must be at least {MIN_USERNAME_LENGTH} characters")

    first_name = _clean_str(data.get('firstName'))
    if first_name is not None and not first_name:
        errors.append("First name is required")
    last_name = _clean_str(data.get('lastName'))
    if last_name is not None and not last_name:
        errors.append("Last name is required")

    if not errors:
        result['valid'] = True
        result['value'] = {
            'email': email_result['value'],
            'password': password,
            'username': username or None,
            'first_name': first_name or None,
            'last_name': last_name or None,
        }
    return result


def validate_login(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a login payload (email + non-empty password)."""
    result = _result()
    email_result = validate_email(data.get('email'))
    result['errors'].extend(email_result['errors'])

    password = data.get('password')
    if not isinstance(password, str) or not password:
        result['errors'].append("Password is required")

    if not result['errors']:
        result['valid'] = True
        result['value'] = {'email': email_result['value'], 'password': password}
    return result


def validate_profile_update(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a profile update payload.

    Accepts camelCase wire names. Only known profile fields are kept;
    blank strings are dropped rather than stored.
    """
    result = _result()
    errors = result['errors']
    cleaned: Dict[str, Any] = {}

    for key, raw in data.items():
        field = _WIRE_TO_FIELD.get(key, key)
        if field not in PROFILE_FIELDS or raw is None:
            continue

        if field == 'age':
            try:
                age = int(raw)
            except (TypeError, ValueError):
                errors.append("Age must be a whole number")
                continue
            if age <= 0:
                errors.append("Age must be positive")
                continue
            cleaned['age'] = age
            continue

        value = _clean_str(raw)
        if not value:
            continue

        if field == 'username' and len(value) < MIN_USERNAME_LENGTH:
            errors.append(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
            continue
        if field == 'date_of_birth':
            try:
                date.fromisoformat(value)
            except ValueError:
                errors.append("Date of birth must be in YYYY-MM-DD format")
                continue
        cleaned[field] = value

    if not errors:
        result['valid'] = True
        result['value'] = cleaned
    return result


def is_allowed_upload_type(mime_type: Optional[str]) -> bool:
    """Images, PDFs and text documents are accepted."""
    if not mime_type:
        return False
    return (
        mime_type.startswith('image/')
        or mime_type == 'application/pdf'
        or 'text/' in mime_type
    )


def validate_upload(file_storage: Any, max_bytes: int = MAX_UPLOAD_BYTES) -> Dict[str, Any]:
    """Validate an uploaded werkzeug ``FileStorage``.

    On success ``value`` is ``(data, mime_type)``. ``status`` carries the
    HTTP status to use when invalid (400, 413 or 415).
    """
    result = _result()
    result['status'] = 400

    if file_storage is None or not getattr(file_storage, 'filename', None):
        result['errors'].append("No file provided")
        return result

    mime_type = file_storage.mimetype or ''
    if not is_allowed_upload_type(mime_type):
        result['errors'].append("Invalid file type")
        result['status'] = 415
        return result

    data = file_storage.read(max_bytes + 1)
    if len(data) > max_bytes:
        result['errors'].append(f"File exceeds the {max_bytes // (1024 * 1024)}MB limit")
        result['status'] = 413
        return result

    result['valid'] = True
    result['value'] = (data, mime_type)
    return result


__all__ = [
    'validate_email',
    'validate_registration',
    'validate_login',
    'validate_profile_update',
    'is_allowed_upload_type',
    'validate_upload',
    'PROFILE_FIELDS',
]
