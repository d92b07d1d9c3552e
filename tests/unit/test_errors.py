import pytest

from uiforge.services.service_base import (
    AuthenticationError,
    ConflictError,
    DuplicateEmailError,
    DuplicateUsernameError,
    NotFoundError,
    ValidationError,
)
from uiforge.utils.errors import (
    AppError,
    ServiceUnavailableError,
    build_error_payload,
    is_service_exception,
    map_service_exception,
)


@pytest.mark.unit
class TestServiceExceptionMapping:

    @pytest.mark.parametrize("exc,status", [
        (DuplicateEmailError(), 409),
        (DuplicateUsernameError(), 409),
        (ConflictError("x"), 409),
        (ValidationError("x"), 400),
        (NotFoundError("x"), 404),
        (AuthenticationError("x"), 401),
        (RuntimeError("x"), 500),
    ])
    def test_status(self, exc, status):
        assert map_service_exception(exc) == status

    def test_is_service_exception(self):
        assert is_service_exception(DuplicateEmailError())
        assert not is_service_exception(RuntimeError())

    def test_duplicate_messages(self):
        assert str(DuplicateEmailError()) == "User with this email already exists"
        assert str(DuplicateUsernameError()) == "Username already exists"


@pytest.mark.unit
def test_app_error_status():
    assert AppError("bad").http_status == 400
    assert AppError("gone", http_status=410).http_status == 410
    assert ServiceUnavailableError("down").http_status == 503


@pytest.mark.unit
def test_error_payload_outside_request():
    payload = build_error_payload("Nope", status=400)
    assert payload['success'] is False
    assert payload['error'] == "Nope"
    assert payload['path'] is None
