#!/usr/bin/env python3
"""Manual check that the configured OSRM service answers route requests."""

import asyncio
import sys

from route_planner.config import settings
from route_planner.models.domain import Coordinate, TransportMode
from route_planner.services.routing.conversion import (
    adjusted_travel_time,
    format_distance,
    format_travel_time,
)
from route_planner.services.routing.errors import ProviderError
from route_planner.services.routing.osrm_client import OSRMClient, check_health
from route_planner.services.routing.profiles import profile_for


async def run() -> int:
    print("=" * 60)
    print("OSRM Connection Test")
    print("=" * 60)
    print()

    print("1. Checking OSRM configuration...")
    print(f"   [OK] OSRM Base URL: {settings.osrm_base_url}")
    print(f"   [OK] Profiles: automobile={settings.osrm_profile_automobile}, walking={settings.osrm_profile_walking}")
    print()

    print("2. Testing OSRM health check...")
    if not await check_health():
        print("   [ERROR] OSRM service is not responding")
        return 1
    print("   [OK] OSRM service is healthy and accessible!")
    print()

    print("3. Testing route requests per transport mode...")
    # Two points in San Francisco
    source = Coordinate(latitude=37.7749, longitude=-122.4194)
    destination = Coordinate(latitude=37.8044, longitude=-122.2712)
    async with OSRMClient() as client:
        for mode in TransportMode:
            try:
                candidates = await client.compute_route(source, destination, profile_for(mode))
            except ProviderError as e:
                print(f"   [ERROR] {mode.value}: {e.message}")
                return 1
            if not candidates:
                print(f"   [ERROR] {mode.value}: no route found")
                return 1
            best = candidates[0]
            seconds = adjusted_travel_time(best.nominal_travel_time_seconds, mode)
            print(
                f"   [OK] {mode.value}: {format_distance(best.distance_meters)}, "
                f"{format_travel_time(seconds)}, {len(best.polyline)} points"
            )
    print()

    print("=" * 60)
    print("[SUCCESS] OSRM is connected and working!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run()))
