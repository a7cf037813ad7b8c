"""Unit tests for exception handlers."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import InvalidCharacterError, MalformedSlugError, WrongTargetError


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_malformed_slug_returns_400(self) -> None:
        app = _create_test_app()

        @app.get("/raise-slug")
        async def _() -> None:
            raise MalformedSlugError("bad")

        response = await _get(app, "/raise-slug")

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "MALFORMED_SLUG"
        assert body["details"] == {"slug": "bad"}

    @pytest.mark.asyncio
    async def test_identifier_error_carries_offending_char(self) -> None:
        app = _create_test_app()

        @app.get("/raise-char")
        async def _() -> None:
            raise InvalidCharacterError("G")

        response = await _get(app, "/raise-char")

        assert response.status_code == 400
        assert response.json()["details"]["char"] == "G"

    @pytest.mark.asyncio
    async def test_relation_error_is_server_error(self) -> None:
        app = _create_test_app()

        @app.get("/raise-relation")
        async def _() -> None:
            raise WrongTargetError("Taps", "expected-id", "actual-id")

        response = await _get(app, "/raise-relation")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "WRONG_TARGET"
        assert body["details"]["expected"] == "expected-id"
        assert body["details"]["actual"] == "actual-id"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        app = _create_test_app()

        response = await _get(app, "/missing")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Not Found"

    @pytest.mark.asyncio
    async def test_validation_error_returns_field_details(self) -> None:
        app = _create_test_app()

        @app.get("/validate")
        async def _(count: int) -> dict[str, int]:
            return {"count": count}

        response = await _get(app, "/validate?count=abc")

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "query.count"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()

        @app.get("/boom")
        async def _() -> None:
            raise RuntimeError("boom")

        response = await _get(app, "/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "unknown"
