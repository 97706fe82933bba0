import asyncio

import httpx
import pytest

from routeplanner.exceptions import NetworkTimeoutError, UpstreamFailureError
from routeplanner.services.upstream import fetch_json, guarded_call


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/down":
        return httpx.Response(500, text="boom")
    if request.url.path == "/text":
        return httpx.Response(200, text="not json")
    if request.url.path == "/broken":
        raise httpx.ConnectError("refused", request=request)
    if request.url.path == "/slow":
        raise httpx.ReadTimeout("slow", request=request)
    return httpx.Response(200, json={"ok": True, "timeout": request.extensions["timeout"]})


async def _call_upstream(path: str, timeout_seconds: float = 1.0):
    async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as http:
        return await fetch_json(
            http, "GET", f"https://upstream.test{path}", operation="Lookup", timeout_seconds=timeout_seconds
        )


@pytest.mark.asyncio
async def test_guarded_call_returns_result_within_deadline():
    async def quick():
        return 42

    assert await guarded_call("quick", quick, timeout_seconds=1.0) == 42


@pytest.mark.asyncio
async def test_guarded_call_cancels_on_deadline():
    cancelled = []

    async def slow():
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    with pytest.raises(NetworkTimeoutError) as excinfo:
        await guarded_call("slow op", slow, timeout_seconds=0.01)

    assert excinfo.value.operation == "slow op"
    assert excinfo.value.note == "Request timed out. Try again."
    assert cancelled == [True]


@pytest.mark.asyncio
async def test_timeout_does_not_cancel_sibling_calls():
    async def slow():
        await asyncio.sleep(5)

    async def sibling():
        await asyncio.sleep(0.05)
        return "done"

    sibling_task = asyncio.create_task(sibling())
    with pytest.raises(NetworkTimeoutError):
        await guarded_call("slow", slow, timeout_seconds=0.01)

    assert await sibling_task == "done"


@pytest.mark.asyncio
async def test_fetch_json_transport_timeout_follows_operation_deadline():
    payload = await _call_upstream("/fine", timeout_seconds=20.0)

    assert payload["ok"] is True
    # the httpx client default of 5s must not apply
    assert payload["timeout"] == {"connect": 20.0, "read": 20.0, "write": 20.0, "pool": 20.0}


@pytest.mark.asyncio
async def test_fetch_json_maps_error_status():
    with pytest.raises(UpstreamFailureError) as excinfo:
        await _call_upstream("/down")

    assert excinfo.value.note == "Lookup failed (500): boom"
    assert excinfo.value.upstream_status == 500


@pytest.mark.asyncio
async def test_fetch_json_rejects_non_json_body():
    with pytest.raises(UpstreamFailureError) as excinfo:
        await _call_upstream("/text")

    assert excinfo.value.note == "Lookup returned a non-JSON body"


@pytest.mark.asyncio
async def test_fetch_json_maps_transport_error():
    with pytest.raises(UpstreamFailureError) as excinfo:
        await _call_upstream("/broken")

    assert excinfo.value.upstream_status is None


@pytest.mark.asyncio
async def test_fetch_json_read_timeout_is_network_timeout():
    with pytest.raises(NetworkTimeoutError):
        await _call_upstream("/slow")
