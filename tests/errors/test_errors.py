"""Tests for the error taxonomy and exception handlers."""

from unittest.mock import MagicMock

import orjson
import pytest
from fastapi.exceptions import RequestValidationError

from journal.errors import (
    BaseAppError,
    ConflictError,
    DuplicateEntryError,
    ForbiddenError,
    ImageTooLargeError,
    InvalidCredentialsError,
    RecordNotFoundError,
    RegistrationClosedError,
    SelfRoleChangeError,
    StorageError,
    UnauthenticatedError,
    UnsupportedImageTypeError,
    UpstreamServiceError,
    create_exception_handler,
    validation_exception_handler,
)


@pytest.fixture
def request_stub() -> MagicMock:
    request = MagicMock()
    request.client.host = "192.168.1.1"
    request.url.path = "/admin/articles"
    return request


class TestTaxonomy:
    """Status codes of each error family."""

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (BaseAppError(), 500),
            (RecordNotFoundError(), 404),
            (DuplicateEntryError(), 409),
            (ConflictError(), 409),
            (UnauthenticatedError(), 401),
            (InvalidCredentialsError(), 401),
            (ForbiddenError(), 403),
            (RegistrationClosedError(), 403),
            (SelfRoleChangeError(), 400),
            (ImageTooLargeError(), 413),
            (UnsupportedImageTypeError("application/pdf", ["image/png"]), 415),
            (UpstreamServiceError(), 502),
            (StorageError(), 502),
        ],
    )
    def test_status_codes(self, error: BaseAppError, status_code: int) -> None:
        """Test the HTTP status each error maps to."""
        assert error.status_code == status_code

    def test_subclass_relationships(self) -> None:
        """Test that handlers registered on a family catch its members."""
        assert isinstance(InvalidCredentialsError(), UnauthenticatedError)
        assert isinstance(RegistrationClosedError(), ForbiddenError)
        assert isinstance(StorageError(), UpstreamServiceError)

    def test_str_is_detail(self) -> None:
        """Test string representation returns the message."""
        assert str(ForbiddenError("nope")) == "nope"


class TestCreateExceptionHandler:
    """Tests for create_exception_handler."""

    @pytest.mark.asyncio
    async def test_forbidden_response(self, request_stub: MagicMock) -> None:
        """Test the response body and the warning log."""
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(request_stub, ForbiddenError("You don't have permission"))

        assert response.status_code == 403
        assert orjson.loads(response.body) == {"detail": "You don't have permission"}
        logger.warning.assert_called_once_with(
            "You don't have permission",
            status_code=403,
            ip="192.168.1.1",
            endpoint="/admin/articles",
        )

    @pytest.mark.asyncio
    async def test_unauthenticated_sets_challenge_header(self, request_stub: MagicMock) -> None:
        """Test that 401 responses carry WWW-Authenticate."""
        response = await create_exception_handler(MagicMock())(
            request_stub,
            UnauthenticatedError(),
        )
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_extra_attributes_are_exposed(self, request_stub: MagicMock) -> None:
        """Test that public error attributes are added to the body."""
        error = UnsupportedImageTypeError("application/pdf", ["image/png", "image/jpeg"])
        response = await create_exception_handler(MagicMock())(request_stub, error)

        body = orjson.loads(response.body)
        assert response.status_code == 415
        assert body["allowed_types"] == ["image/png", "image/jpeg"]
        assert body["content_type"] == "application/pdf"
        assert "status_code" not in body

    @pytest.mark.asyncio
    async def test_generic_exception_is_500(self, request_stub: MagicMock) -> None:
        """Test that unknown exceptions fall back to a 500."""
        response = await create_exception_handler(MagicMock())(request_stub, ValueError("boom"))
        assert response.status_code == 500
        assert orjson.loads(response.body) == {"detail": "Internal Server Error"}


class TestRequestValidationHandler:
    """Tests for validation_exception_handler."""

    @pytest.mark.asyncio
    async def test_errors_are_flattened(self, request_stub: MagicMock) -> None:
        """Test the 422 body format."""
        exc = RequestValidationError(
            [
                {
                    "loc": ("body", "title"),
                    "msg": "Value error, must not be empty",
                    "type": "value_error",
                },
            ],
        )
        response = await validation_exception_handler(request_stub, exc)

        assert response.status_code == 422
        assert orjson.loads(response.body) == {
            "detail": "Validation failed",
            "errors": [
                {
                    "field": "title",
                    "message": "Value error, must not be empty",
                    "type": "value_error",
                },
            ],
        }
