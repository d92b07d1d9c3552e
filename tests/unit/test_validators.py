import io

import pytest
from werkzeug.datastructures import FileStorage

from uiforge.utils.validators import (
    is_allowed_upload_type,
    validate_login,
    validate_profile_update,
    validate_registration,
    validate_upload,
)


@pytest.mark.unit
class TestRegistrationValidation:

    def test_valid_payload(self):
        result = validate_registration({
            'email': 'Ada@Example.com', 'password': 'longenough', 'username': 'ada',
            'firstName': 'Ada', 'lastName': 'Lovelace',
        })
        assert result['valid']
        assert result['value']['email'] == 'ada@example.com'
        assert result['value']['first_name'] == 'Ada'

    @pytest.mark.parametrize("payload", [
        {'email': 'not-an-email', 'password': 'longenough'},
        {'email': 'a@example.com', 'password': 'short'},
        {'email': 'a@example.com', 'password': 'longenough', 'username': 'ab'},
        {'email': 'a@example.com', 'password': 'longenough', 'firstName': '   '},
        {'password': 'longenough'},
    ])
    def test_invalid_payloads(self, payload):
        result = validate_registration(payload)
        assert not result['valid']
        assert result['errors']

    def test_optional_fields_may_be_omitted(self):
        result = validate_registration({'email': 'a@example.com', 'password': 'longenough'})
        assert result['valid']
        assert result['value']['username'] is None


@pytest.mark.unit
def test_login_requires_password():
    assert not validate_login({'email': 'a@example.com', 'password': ''})['valid']
    assert validate_login({'email': 'a@example.com', 'password': 'x'})['valid']


@pytest.mark.unit
class TestProfileValidation:

    def test_camel_case_fields_are_mapped(self):
        result = validate_profile_update({'firstName': 'Ada', 'dateOfBirth': '1815-12-10', 'age': '36', 'bio': 'hi'})
        assert result['valid']
        assert result['value'] == {'first_name': 'Ada', 'date_of_birth': '1815-12-10', 'age': 36, 'bio': 'hi'}

    def test_unknown_fields_are_dropped(self):
        result = validate_profile_update({'email': 'x@example.com', 'passwordHash': 'x'})
        assert result['valid']
        assert result['value'] == {}

    @pytest.mark.parametrize("payload", [
        {'age': 0},
        {'age': -3},
        {'age': 'old'},
        {'dateOfBirth': '10/12/1815'},
        {'username': 'ab'},
    ])
    def test_invalid_values(self, payload):
        assert not validate_profile_update(payload)['valid']


@pytest.mark.unit
class TestUploadValidation:

    @pytest.mark.parametrize("mime,allowed", [
        ('image/png', True),
        ('image/jpeg', True),
        ('application/pdf', True),
        ('text/plain', True),
        ('application/zip', False),
        ('', False),
    ])
    def test_allowed_types(self, mime, allowed):
        assert is_allowed_upload_type(mime) is allowed

    def test_missing_file(self):
        result = validate_upload(None)
        assert not result['valid']
        assert result['status'] == 400

    def test_wrong_type(self):
        upload = FileStorage(io.BytesIO(b'PK'), filename='a.zip', content_type='application/zip')
        result = validate_upload(upload)
        assert result['status'] == 415

    def test_too_large(self):
        upload = FileStorage(io.BytesIO(b'x' * 11), filename='a.png', content_type='image/png')
        result = validate_upload(upload, max_bytes=10)
        assert result['status'] == 413

    def test_valid_upload(self):
        upload = FileStorage(io.BytesIO(b'png-bytes'), filename='a.png', content_type='image/png')
        result = validate_upload(upload)
        assert result['valid']
        assert result['value'] == (b'png-bytes', 'image/png')
