import asyncio
from urllib.parse import unquote

import httpx
import pytest

from route_planner.models.domain import Coordinate, ProviderProfile
from route_planner.services.routing.errors import ProviderError
from route_planner.services.routing.osrm_client import OSRMClient, check_health, decode_polyline

# Reference polyline from the Google encoding documentation
ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
SOURCE = Coordinate(38.5, -120.2)
DESTINATION = Coordinate(43.252, -126.453)


def _client(handler, **kwargs) -> OSRMClient:
    options = {"base_url": "http://osrm.test", "max_retries": 2, "backoff_seconds": 0.0}
    options.update(kwargs)
    return OSRMClient(transport=httpx.MockTransport(handler), **options)


def _compute(client: OSRMClient, profile=ProviderProfile.AUTOMOBILE):
    async def run():
        try:
            return await client.compute_route(SOURCE, DESTINATION, profile)
        finally:
            await client.aclose()

    return asyncio.run(run())


def test_decode_polyline_reference_string():
    assert decode_polyline(ENCODED) == [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def test_compute_route_parses_candidates():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "code": "Ok",
                "routes": [
                    {"geometry": ENCODED, "distance": 1609.34, "duration": 600.0},
                    {"geometry": ENCODED, "distance": 2000.0, "duration": 700.0},
                ],
            },
        )

    candidates = _compute(_client(handler, alternatives=True))

    assert len(candidates) == 2
    assert candidates[0].distance_meters == 1609.34
    assert candidates[0].nominal_travel_time_seconds == 600.0
    assert candidates[0].polyline[1] == Coordinate(40.7, -120.95)

    request = seen[0]
    assert request.url.path.startswith("/route/v1/driving/")
    assert "-120.2,38.5;-126.453,43.252" in unquote(str(request.url))
    assert request.url.params["geometries"] == "polyline"
    assert request.url.params["alternatives"] == "true"


def test_walking_profile_uses_configured_name():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"code": "Ok", "routes": []})

    client = _client(handler, profile_names={ProviderProfile.AUTOMOBILE: "car", ProviderProfile.WALKING: "foot"})
    assert _compute(client, ProviderProfile.WALKING) == []
    assert seen[0].url.path.startswith("/route/v1/foot/")


def test_no_route_code_returns_empty_list():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": "NoRoute", "message": "Impossible route between points"})

    assert _compute(_client(handler)) == []


def test_invalid_query_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": "InvalidQuery", "message": "Query string malformed"})

    with pytest.raises(ProviderError, match="Query string malformed"):
        _compute(_client(handler))


def test_server_errors_are_retried_then_reported():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, text="unavailable")

    with pytest.raises(ProviderError, match="HTTP 503"):
        _compute(_client(handler, max_retries=2))
    assert len(calls) == 3


def test_transient_error_recovers_on_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json={"code": "Ok", "routes": [{"geometry": ENCODED, "distance": 5.0, "duration": 1.0}]})

    candidates = _compute(_client(handler))

    assert len(calls) == 2
    assert candidates[0].distance_meters == 5.0


def test_connection_failure_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError, match="Failed to connect"):
        _compute(_client(handler, max_retries=0))


def test_malformed_route_payload_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": "Ok", "routes": [{"distance": 1.0}]})

    with pytest.raises(ProviderError, match="Malformed"):
        _compute(_client(handler))


def test_check_health():
    def healthy(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": "Ok", "routes": []})

    def down(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    assert asyncio.run(check_health("http://osrm.test", transport=httpx.MockTransport(healthy))) is True
    assert asyncio.run(check_health("http://osrm.test", transport=httpx.MockTransport(down))) is False
