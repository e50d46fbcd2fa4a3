"""Unit tests for exception handlers and the error response shape."""

from __future__ import annotations

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from recipe_manager.core.exceptions import (
    BadRequestException,
    PayloadTooLargeException,
    ServiceUnavailableException,
    UnauthorizedException,
    setup_exception_handlers,
)
from recipe_manager.core.middleware import RequestIDMiddleware


pytestmark = pytest.mark.unit


class _Body(BaseModel):
    url: str


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/bad-request")
    async def bad_request() -> None:
        raise BadRequestException("File type not allowed")

    @app.get("/unauthorized")
    async def unauthorized() -> None:
        raise UnauthorizedException

    @app.get("/too-large")
    async def too_large() -> None:
        raise PayloadTooLargeException(2048, 1024)

    @app.get("/unavailable")
    async def unavailable() -> None:
        raise ServiceUnavailableException

    @app.get("/http-error")
    async def http_error() -> None:
        raise HTTPException(status_code=418, detail="teapot", headers={"X-T": "1"})

    @app.post("/validate")
    async def validate(body: _Body) -> dict[str, str]:
        return {"url": body.url}

    @app.get("/boom")
    async def boom() -> None:
        msg = "unexpected"
        raise RuntimeError(msg)

    return TestClient(app, raise_server_exceptions=False)


class TestAppExceptions:
    """Tests for AppException subclasses."""

    @pytest.mark.parametrize(
        ("path", "status_code", "error"),
        [
            ("/bad-request", 400, "BAD_REQUEST"),
            ("/unauthorized", 401, "UNAUTHORIZED"),
            ("/too-large", 413, "PAYLOAD_TOO_LARGE"),
            ("/unavailable", 503, "SERVICE_UNAVAILABLE"),
        ],
    )
    def test_renders_error_response(
        self, client: TestClient, path: str, status_code: int, error: str
    ):
        """Should render the shared error shape with the request ID."""
        response = client.get(path, headers={"X-Request-ID": "req-1"})

        assert response.status_code == status_code
        body = response.json()
        assert body["error"] == error
        assert body["message"]
        assert body["request_id"] == "req-1"

    def test_payload_too_large_message(self, client: TestClient):
        """Should mention the received size and the limit."""
        body = client.get("/too-large").json()

        assert body["message"] == "2048 bytes exceeds the maximum of 1024 bytes"

    def test_payload_too_large_without_size(self):
        """Should still read well when the size is unknown."""
        exc = PayloadTooLargeException(None, 10)

        assert exc.message == "Body exceeds the maximum of 10 bytes"


class TestFrameworkErrors:
    """Tests for framework and unexpected errors."""

    def test_http_exception_keeps_headers(self, client: TestClient):
        """Should pass HTTPException headers through."""
        response = client.get("/http-error")

        assert response.status_code == 418
        assert response.json()["error"] == "HTTP_ERROR"
        assert response.headers["X-T"] == "1"

    def test_validation_error_details(self, client: TestClient):
        """Should list each invalid field."""
        response = client.post("/validate", json={})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.url"

    def test_unhandled_exception(self, client: TestClient):
        """Should hide internals behind a generic 500."""
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_SERVER_ERROR"
        assert "unexpected" not in response.json()["message"]
