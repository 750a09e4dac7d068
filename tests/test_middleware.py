# tests/test_middleware.py
"""Unit tests for the optional API key middleware."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from garage.main import APIKeyMiddleware


def make_request(path="/api/v1/inventory", header_key=None, query_key=None):
    request = MagicMock()
    request.url.path = path
    request.headers = {"X-API-Key": header_key} if header_key else {}
    request.query_params = {"api_key": query_key} if query_key else {}
    return request


class TestAPIKeyMiddleware:
    @pytest.mark.asyncio
    async def test_missing_key_rejected(self):
        middleware = APIKeyMiddleware(app=MagicMock())
        call_next = AsyncMock()

        with patch("garage.main.settings.API_KEY", "s3cret"):
            response = await middleware.dispatch(make_request(), call_next)

        assert response.status_code == 401
        call_next.assert_not_called()

    @pytest.mark.asyncio
    async def test_header_key_accepted(self):
        middleware = APIKeyMiddleware(app=MagicMock())
        call_next = AsyncMock(return_value="downstream")

        with patch("garage.main.settings.API_KEY", "s3cret"):
            response = await middleware.dispatch(make_request(header_key="s3cret"), call_next)

        assert response == "downstream"

    @pytest.mark.asyncio
    async def test_query_key_accepted(self):
        middleware = APIKeyMiddleware(app=MagicMock())
        call_next = AsyncMock(return_value="downstream")

        with patch("garage.main.settings.API_KEY", "s3cret"):
            response = await middleware.dispatch(make_request(query_key="s3cret"), call_next)

        assert response == "downstream"

    @pytest.mark.asyncio
    async def test_health_is_open(self):
        middleware = APIKeyMiddleware(app=MagicMock())
        call_next = AsyncMock(return_value="downstream")

        with patch("garage.main.settings.API_KEY", "s3cret"):
            response = await middleware.dispatch(make_request(path="/api/v1/health"), call_next)

        assert response == "downstream"
