"""Mapping from user transport modes to provider profiles."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ...models.domain import ProviderProfile, TransportMode

# The provider has no biking profile: biking routes are computed as automobile
# routes and the travel time is inflated afterwards.
PROFILE_TABLE: Mapping[TransportMode, ProviderProfile] = MappingProxyType(
    {
        TransportMode.DRIVING: ProviderProfile.AUTOMOBILE,
        TransportMode.WALKING: ProviderProfile.WALKING,
        TransportMode.BIKING: ProviderProfile.AUTOMOBILE,
    }
)


def profile_for(mode: TransportMode) -> ProviderProfile:
    return PROFILE_TABLE[mode]
