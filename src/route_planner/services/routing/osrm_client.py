"""Async HTTP client for the OSRM route service."""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Protocol

import httpx

from ...config import settings
from ...models.domain import Coordinate, ProviderProfile, RouteCandidate
from .errors import ProviderError

logger = logging.getLogger(__name__)


class DirectionsProvider(Protocol):
    async def compute_route(
        self, source: Coordinate, destination: Coordinate, profile: ProviderProfile
    ) -> list[RouteCandidate]:
        ...


def default_profile_names() -> dict[ProviderProfile, str]:
    return {
        ProviderProfile.AUTOMOBILE: settings.osrm_profile_automobile,
        ProviderProfile.WALKING: settings.osrm_profile_walking,
    }


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        profile_names: Mapping[ProviderProfile, str] | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        alternatives: bool | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.profile_names = dict(profile_names or default_profile_names())
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds
        self.alternatives = alternatives if alternatives is not None else settings.osrm_alternatives
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> OSRMClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def build_url(self, source: Coordinate, destination: Coordinate, profile: ProviderProfile) -> str:
        try:
            profile_name = self.profile_names[profile]
        except KeyError as exc:
            raise ProviderError(f"No OSRM profile configured for '{profile.value}'.") from exc
        # OSRM route endpoint expects coordinates as "lon,lat;lon,lat"
        coordinate_str = ";".join(
            f"{point.longitude},{point.latitude}" for point in (source, destination)
        )
        return f"{self.base_url}/route/v1/{profile_name}/{coordinate_str}"

    async def compute_route(
        self, source: Coordinate, destination: Coordinate, profile: ProviderProfile
    ) -> list[RouteCandidate]:
        """Compute candidate routes between two coordinates.

        Returns an empty list when OSRM reports that no route exists. Any other
        failure is raised as ProviderError.
        """
        url = self.build_url(source, destination, profile)
        params = {
            "overview": "full",
            "geometries": "polyline",
            "steps": "false",
            "alternatives": "true" if self.alternatives else "false",
        }
        data = await self._get_json(url, params)

        code = data.get("code")
        if code == "NoRoute":
            logger.info(f"OSRM found no route for profile '{profile.value}'")
            return []
        if code != "Ok":
            error_msg = data.get("message", "Unknown OSRM route error")
            raise ProviderError(f"OSRM route request failed ({code}): {error_msg}")

        try:
            return [_parse_route(route) for route in data.get("routes", [])]
        except (KeyError, TypeError, ValueError, IndexError) as exc:
            raise ProviderError(f"Malformed OSRM route response: {exc}") from exc

    async def _get_json(self, url: str, params: dict) -> dict:
        attempt = 0
        while True:
            try:
                response = await self._client.get(url, params=params)
                if response.status_code >= 500:
                    response.raise_for_status()
                # OSRM answers 400 with a JSON body for InvalidQuery, NoRoute and friends
                if response.status_code >= 400 and not _is_json(response):
                    response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict):
                    raise ProviderError("OSRM response is not a JSON object.")
                return data
            except httpx.HTTPStatusError as e:
                attempt += 1
                if attempt > self.max_retries:
                    raise ProviderError(
                        f"OSRM returned HTTP {e.response.status_code} for {url}"
                    ) from e
                await asyncio.sleep(self.backoff_seconds * attempt)
            except httpx.TimeoutException as e:
                attempt += 1
                if attempt > self.max_retries:
                    logger.warning(f"OSRM route request timed out after {self.max_retries} attempts: {e}")
                    raise ProviderError(f"OSRM route request timed out: {e}") from e
                wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                logger.debug(f"OSRM route timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                await asyncio.sleep(wait_time)
            except (httpx.ConnectError, httpx.NetworkError) as e:
                attempt += 1
                if attempt > self.max_retries:
                    raise ProviderError(
                        f"Failed to connect to OSRM service at {self.base_url}: {e}"
                    ) from e
                wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                logger.debug(f"OSRM network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                await asyncio.sleep(wait_time)
            except httpx.HTTPError as e:
                raise ProviderError(f"OSRM request failed: {e}") from e
            except ValueError as e:
                # json decoding errors
                raise ProviderError(f"OSRM response is not valid JSON: {e}") from e


def _is_json(response: httpx.Response) -> bool:
    return "json" in response.headers.get("content-type", "")


def _parse_route(route: dict) -> RouteCandidate:
    points = decode_polyline(route["geometry"])
    return RouteCandidate(
        polyline=tuple(Coordinate(latitude=lat, longitude=lon) for lat, lon in points),
        distance_meters=float(route["distance"]),
        nominal_travel_time_seconds=float(route["duration"]),
    )


def decode_polyline(polyline: str, precision: int = 5) -> list[tuple[float, float]]:
    """Decode Google polyline string to list of (lat, lon) coordinates.

    OSRM uses Google's polyline encoding format for route geometry.
    """
    coordinates = []
    index = 0
    lat = 0
    lon = 0
    factor = 10 ** precision

    while index < len(polyline):
        deltas = []
        for _ in range(2):
            shift = 0
            result = 0
            while True:
                b = ord(polyline[index]) - 63
                index += 1
                result |= (b & 0x1f) << shift
                shift += 5
                if b < 0x20:
                    break
            deltas.append(~(result >> 1) if (result & 1) else (result >> 1))
        lat += deltas[0]
        lon += deltas[1]
        coordinates.append((lat / factor, lon / factor))

    return coordinates


async def check_health(base_url: str | None = None, transport: httpx.AsyncBaseTransport | None = None) -> bool:
    """Check OSRM service health with a minimal route request.

    Public OSRM endpoints may not have a /health endpoint, so connectivity is
    tested by routing between two points in Berlin.
    """
    base = (base_url or settings.osrm_base_url).rstrip("/")
    if not base:
        return False
    url = f"{base}/route/v1/{settings.osrm_profile_automobile}/13.388860,52.517037;13.385983,52.496891"
    try:
        async with httpx.AsyncClient(timeout=5.0, transport=transport) as client:
            response = await client.get(url, params={"overview": "false"})
            response.raise_for_status()
            data = response.json()
        return data.get("code") == "Ok"
    except (httpx.HTTPError, ValueError) as e:
        logger.debug(f"OSRM health check failed: {e}")
        return False
