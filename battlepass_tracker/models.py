"""Flat records passed between the tracker's stages."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime, timezone
from typing import Any, Mapping

from battlepass_tracker.errors import UpstreamDataError

# Field name -> key used in the on-disk cache. The keys match the files written by
# earlier releases of the tool so existing caches keep working.
CACHE_KEYS: dict[str, str] = {
    "client_version": "clientVersion",
    "shard_id": "shard",
    "session_id": "ssid",
    "access_token": "accessToken",
    "player_id": "puuid",
    "entitlements_token": "entitlementsToken",
    "client_platform": "clientPlatform",
}


@dataclass(frozen=True, slots=True)
class CredentialBundle:
    """Every secret needed to call the game data services."""

    client_version: str
    shard_id: str
    session_id: str
    access_token: str
    player_id: str
    entitlements_token: str
    client_platform: str

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_cache(self) -> dict[str, str]:
        """Serialise using the cache key names."""
        return {CACHE_KEYS[name]: value for name, value in asdict(self).items()}

    @staticmethod
    def from_cache(data: Mapping[str, Any]) -> dict[str, str]:
        """Return the usable fields of a cache mapping, keyed by field name.

        Unknown keys are ignored; empty or non-string values count as missing.
        """
        resolved: dict[str, str] = {}
        for name, key in CACHE_KEYS.items():
            value = data.get(key)
            if isinstance(value, str) and value:
                resolved[name] = value
        return resolved


@dataclass(frozen=True, slots=True)
class RewardTrackRecord:
    """Progress in the season's battlepass contract."""

    definition_id: str
    total_progression_earned: int
    level_reached: int

    @classmethod
    def from_contract(cls, contract: Mapping[str, Any]) -> "RewardTrackRecord":
        try:
            progression = contract["ContractProgression"]
            return cls(
                definition_id=str(contract["ContractDefinitionID"]),
                total_progression_earned=max(0, int(progression["TotalProgressionEarned"])),
                level_reached=max(0, int(contract["ProgressionLevelReached"])),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamDataError(f"Malformed contract record: {exc}") from exc


@dataclass(frozen=True, slots=True)
class SeasonRecord:
    is_active: bool
    kind: str
    end_time: datetime

    @classmethod
    def from_payload(cls, season: Mapping[str, Any]) -> "SeasonRecord":
        try:
            return cls(
                is_active=bool(season["IsActive"]),
                kind=str(season["Type"]),
                end_time=parse_timestamp(season["EndTime"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamDataError(f"Malformed season record: {exc}") from exc


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, assuming UTC when no offset is given."""

    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
