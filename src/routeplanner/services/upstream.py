"""Deadline-bound outbound calls shared by every upstream client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

import httpx

from ..exceptions import NetworkTimeoutError, UpstreamFailureError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Upstream bodies are echoed into error notes; keep them short.
MAX_ERROR_BODY_CHARS = 300


async def guarded_call(
    operation: str,
    factory: Callable[[], Awaitable[T]],
    timeout_seconds: float,
) -> T:
    """Run one outbound operation, cancelling it once ``timeout_seconds`` elapse.

    Only the wrapped operation is cancelled; sibling calls running in other tasks
    are unaffected. Timeouts surface as ``NetworkTimeoutError`` and transport errors
    as ``UpstreamFailureError`` so callers can tell them apart.
    """
    try:
        return await asyncio.wait_for(factory(), timeout=timeout_seconds)
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        logger.warning(f"{operation} exceeded its {timeout_seconds:.1f}s deadline")
        raise NetworkTimeoutError(operation) from exc
    except httpx.HTTPError as exc:
        logger.warning(f"{operation} transport error: {exc}")
        raise UpstreamFailureError(f"{operation} failed: {exc}", operation=operation) from exc


async def fetch_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    operation: str,
    timeout_seconds: float,
    **kwargs: Any,
) -> Any:
    """Issue a single request and return its decoded JSON body. Never retries.

    The transport timeout matches the operation deadline so the client default
    never cuts a call short.
    """

    async def _send() -> httpx.Response:
        return await client.request(method, url, timeout=timeout_seconds, **kwargs)

    response = await guarded_call(operation, _send, timeout_seconds)
    if not response.is_success:
        body = response.text[:MAX_ERROR_BODY_CHARS]
        message = f"{operation} failed ({response.status_code})"
        if body:
            message = f"{message}: {body}"
        raise UpstreamFailureError(message, operation=operation, upstream_status=response.status_code)
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamFailureError(
            f"{operation} returned a non-JSON body",
            operation=operation,
            upstream_status=response.status_code,
        ) from exc
