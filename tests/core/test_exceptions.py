"""
tests/core/test_exceptions.py

Application-level 404 handling: unknown routes get a standard error body,
service-raised 404s keep their own message.
"""

import pytest
from fastapi import HTTPException, status
from httpx import AsyncClient
from starlette.requests import Request

from app.core.exceptions import APIError, not_found_handler


def _request(path: str) -> Request:
    return Request({"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""})


def test_api_error_wraps_message() -> None:
    error = APIError(status.HTTP_403_FORBIDDEN, "Access denied")
    assert error.status_code == status.HTTP_403_FORBIDDEN
    assert error.detail == {"error": "Access denied"}


@pytest.mark.asyncio
async def test_unknown_route_returns_standard_error(async_client: AsyncClient) -> None:
    response = await async_client.get("/no-such-route")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": {"error": "Route /no-such-route not found"}}


@pytest.mark.asyncio
async def test_service_not_found_keeps_message() -> None:
    response = await not_found_handler(
        _request("/profile/abc"),
        HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"),
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.body == b'{"detail":"Profile not found"}'


@pytest.mark.asyncio
async def test_api_error_not_found_keeps_body() -> None:
    response = await not_found_handler(
        _request("/wallet/balance"), APIError(status.HTTP_404_NOT_FOUND, "Wallet not found")
    )
    assert response.body == b'{"detail":{"error":"Wallet not found"}}'
