"""
Unit tests for Logfire middleware.

This test suite covers:
- Request/response processing
- Performance metrics collection
- Error handling and exception tracking
- Slow request detection
- Header injection
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from user_service.server.middleware.logfire_middleware import SLOW_REQUEST_THRESHOLD_MS, LogfireMiddleware

MODULE = "user_service.server.middleware.logfire_middleware"


def _mock_request(method: str = "GET", path: str = "/api/user/all"):
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.url.query = ""
    request.state = MagicMock()
    return request


class TestLogfireMiddlewareDispatch:
    """Test LogfireMiddleware.dispatch method."""

    @pytest.mark.asyncio
    async def test_middleware_processes_successful_request(self):
        """Test that middleware processes successful requests."""
        mock_response = Response(content="test", status_code=200)

        async def mock_call_next(request):
            return mock_response

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(_mock_request(), mock_call_next)

        assert response.status_code == 200
        mock_log.assert_called_once()
        call_args = mock_log.call_args
        assert call_args[1]["method"] == "GET"
        assert call_args[1]["path"] == "/api/user/all"
        assert call_args[1]["status_code"] == 200
        assert call_args[1]["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_middleware_adds_process_time_header(self):
        """Test that middleware adds X-Process-Time header."""

        async def mock_call_next(request):
            return Response(content="test", status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request"):
            response = await middleware.dispatch(_mock_request(), mock_call_next)

        assert "X-Process-Time" in response.headers
        assert float(response.headers["X-Process-Time"]) >= 0

    @pytest.mark.asyncio
    async def test_middleware_stores_start_time(self):
        request = _mock_request()

        async def mock_call_next(req):
            return Response(status_code=204)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request"):
            await middleware.dispatch(request, mock_call_next)

        assert isinstance(request.state.start_time, float)

    @pytest.mark.asyncio
    async def test_middleware_detects_slow_requests(self):
        """Test that middleware warns about slow requests."""

        async def mock_call_next(request):
            return Response(content="test", status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())
        elapsed = (SLOW_REQUEST_THRESHOLD_MS + 500) / 1000

        with (
            patch(f"{MODULE}.log_api_request"),
            patch(f"{MODULE}.logger") as mock_logger,
            patch(f"{MODULE}.time.time", side_effect=[100.0, 100.0 + elapsed]),
        ):
            await middleware.dispatch(_mock_request(), mock_call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_middleware_fast_request_no_warning(self):
        async def mock_call_next(request):
            return Response(status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())

        with (
            patch(f"{MODULE}.log_api_request"),
            patch(f"{MODULE}.logger") as mock_logger,
            patch(f"{MODULE}.time.time", side_effect=[100.0, 100.01]),
        ):
            await middleware.dispatch(_mock_request(), mock_call_next)

        mock_logger.warning.assert_not_called()

    @pytest.mark.asyncio
    async def test_middleware_handles_request_exception(self):
        """Test that middleware logs and re-raises exceptions."""

        async def mock_call_next(request):
            raise ValueError("Test error")

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request") as mock_log, patch(f"{MODULE}.logger") as mock_logger:
            with pytest.raises(ValueError, match="Test error"):
                await middleware.dispatch(_mock_request("DELETE", "/api/user/id/1"), mock_call_next)

        mock_logger.error.assert_called_once()
        assert mock_log.call_args[1]["status_code"] == 500
        assert mock_log.call_args[1]["method"] == "DELETE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [200, 401, 403, 404, 409, 503])
    async def test_middleware_logs_different_status_codes(self, status_code):
        async def mock_call_next(request):
            return Response(status_code=status_code)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(_mock_request(), mock_call_next)

        assert response.status_code == status_code
        assert mock_log.call_args[1]["status_code"] == status_code
