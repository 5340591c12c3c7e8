"""
Unit Tests for Request Context Middleware.

Tests request ID generation and propagation, timing headers
and structlog context binding.
"""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request
from starlette.responses import Response

from temporal_books.core.middleware import RequestContextMiddleware


@pytest.fixture
def middleware():
    return RequestContextMiddleware(MagicMock())


@pytest.fixture
def mock_request():
    request = MagicMock(spec=Request)
    request.headers = {}
    request.method = "PATCH"
    request.url = MagicMock()
    request.url.path = "/books/e1"
    request.client = MagicMock()
    request.client.host = "127.0.0.1"
    request.state = MagicMock()
    return request


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware."""

    @pytest.mark.asyncio
    async def test_propagates_incoming_request_id(self, middleware, mock_request):
        mock_request.headers = {"X-Request-ID": "incoming-id"}

        async def call_next(request):
            assert request.state.request_id == "incoming-id"
            return Response(content="OK")

        with patch("temporal_books.core.middleware.structlog.contextvars"):
            response = await middleware.dispatch(mock_request, call_next)

        assert response.headers["X-Request-ID"] == "incoming-id"

    @pytest.mark.asyncio
    async def test_generates_request_id(self, middleware, mock_request):
        async def call_next(request):
            return Response(content="OK")

        with patch("temporal_books.core.middleware.structlog.contextvars"):
            response = await middleware.dispatch(mock_request, call_next)

        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_sets_response_time(self, middleware, mock_request):
        async def call_next(request):
            return Response(content="OK")

        with patch("temporal_books.core.middleware.structlog.contextvars"):
            response = await middleware.dispatch(mock_request, call_next)

        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_binds_and_clears_context(self, middleware, mock_request):
        mock_request.headers = {"X-Request-ID": "ctx-id"}

        async def call_next(request):
            return Response(content="OK")

        with patch("temporal_books.core.middleware.structlog.contextvars") as contextvars:
            await middleware.dispatch(mock_request, call_next)

        contextvars.bind_contextvars.assert_called_once_with(
            request_id="ctx-id",
            method="PATCH",
            path="/books/e1",
        )
        assert contextvars.clear_contextvars.call_count == 2

    @pytest.mark.asyncio
    async def test_reraises_and_clears_context(self, middleware, mock_request):
        async def call_next(request):
            raise RuntimeError("downstream failure")

        with patch("temporal_books.core.middleware.structlog.contextvars") as contextvars:
            with pytest.raises(RuntimeError, match="downstream failure"):
                await middleware.dispatch(mock_request, call_next)

        assert contextvars.clear_contextvars.call_count == 2
