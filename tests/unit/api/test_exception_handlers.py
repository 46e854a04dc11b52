"""Unit tests for exception handlers."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    CounterOverflowError,
    HandleNotFoundError,
    HandleTakenError,
    UnauthorizedError,
    UriTooLongError,
)


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _raise(exc: Exception):
    app = _create_test_app()

    @app.get("/raise")
    async def _() -> None:
        raise exc

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get("/raise")


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_app_exception_returns_error_code_and_message(self) -> None:
        response = await _raise(HandleNotFoundError("profile", "alice"))

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "HANDLE_NOT_FOUND"
        assert "alice" in body["message"]
        assert body["details"] == {"namespace": "profile", "handle": "alice"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("exc", "status", "code"),
        [
            (UnauthorizedError("ab"), 403, "UNAUTHORIZED_AUTHORITY"),
            (UriTooLongError("metadata uri", 256), 400, "URI_TOO_LONG"),
            (HandleTakenError("post_group", "blog"), 409, "HANDLE_TAKEN"),
            (CounterOverflowError("ab"), 409, "COUNTER_OVERFLOW"),
        ],
    )
    async def test_status_per_error(self, exc: Exception, status: int, code: str) -> None:
        response = await _raise(exc)

        assert response.status_code == status
        assert response.json()["error_code"] == code

    @pytest.mark.asyncio
    async def test_handle_taken_points_at_existing_binding(self) -> None:
        response = await _raise(HandleTakenError("profile", "alice"))

        assert response.json()["details"] == {
            "namespace": "profile",
            "handle": "alice",
            "resolve": "/api/v1/names/profile/alice",
        }

    @pytest.mark.asyncio
    async def test_counter_overflow_reports_max_index(self) -> None:
        response = await _raise(CounterOverflowError("ab"))

        assert response.json()["details"] == {"address": "ab", "max_index": 2**32 - 1}

    @pytest.mark.asyncio
    async def test_store_failure_returns_503(self) -> None:
        from sqlalchemy.exc import OperationalError

        response = await _raise(OperationalError("SELECT 1", {}, Exception("down")))

        assert response.status_code == 503
        body = response.json()
        assert body["error_code"] == "DATABASE_ERROR"
        assert "down" not in body["message"]

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_body(self) -> None:
        transport = ASGITransport(app=_create_test_app())
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/missing")

        assert response.status_code == 404
        assert response.json() == {
            "error_code": "NOT_FOUND",
            "message": "Not Found",
            "details": None,
        }

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        response = await _raise(HTTPException(status_code=403, detail="Forbidden"))

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "FORBIDDEN"
        assert body["message"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_validation_error_returns_field_details(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            username: str = Field(..., min_length=1)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"username": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.username"
        assert body["details"][0]["location"] == "body"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        import json
        from unittest.mock import MagicMock

        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, RuntimeError("Something went wrong"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"
