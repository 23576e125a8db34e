"""Credential resolution: cached value first, live lookup otherwise.

Each bundle field has one lookup. Lookups run in declaration order and receive
the fields resolved so far, which is how the access token reaches the player id
and entitlements lookups:

    client_version      -> version API
    shard_id            -> client log file
    session_id          -> client settings file
    access_token        -> authorize redirect (needs session_id)
    player_id           -> userinfo (needs access_token)
    entitlements_token  -> entitlements API (needs access_token)
    client_platform     -> constant

The bundle is written back to the cache only after every field resolved.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Mapping

import httpx

from battlepass_tracker.auth import local_artifacts, riot_auth
from battlepass_tracker.config import Settings, get_settings
from battlepass_tracker.logging import get_logger
from battlepass_tracker.models import CredentialBundle
from battlepass_tracker.storage import CredentialCache

Lookup = Callable[[Mapping[str, str]], Awaitable[str]]


def default_lookups(client: httpx.AsyncClient, settings: Settings) -> dict[str, Lookup]:
    """Build the live lookup table for every bundle field."""

    async def client_version(resolved: Mapping[str, str]) -> str:
        return await riot_auth.fetch_client_version(client, settings)

    async def shard_id(resolved: Mapping[str, str]) -> str:
        return local_artifacts.read_shard(settings)

    async def session_id(resolved: Mapping[str, str]) -> str:
        return local_artifacts.read_session_id(settings)

    async def access_token(resolved: Mapping[str, str]) -> str:
        return await riot_auth.fetch_access_token(client, settings, resolved["session_id"])

    async def player_id(resolved: Mapping[str, str]) -> str:
        return await riot_auth.fetch_player_id(client, settings, resolved["access_token"])

    async def entitlements_token(resolved: Mapping[str, str]) -> str:
        return await riot_auth.fetch_entitlements_token(client, settings, resolved["access_token"])

    async def client_platform(resolved: Mapping[str, str]) -> str:
        return settings.client_platform

    return {
        "client_version": client_version,
        "shard_id": shard_id,
        "session_id": session_id,
        "access_token": access_token,
        "player_id": player_id,
        "entitlements_token": entitlements_token,
        "client_platform": client_platform,
    }


class CredentialResolver:
    """Produce a complete CredentialBundle from the cache and the lookup table."""

    def __init__(
        self,
        cache: CredentialCache,
        *,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
        lookups: Mapping[str, Lookup] | None = None,
    ) -> None:
        self.cache = cache
        self.settings = settings or get_settings()
        if lookups is None:
            if client is None:
                raise ValueError("CredentialResolver needs either an HTTP client or a lookup table")
            lookups = default_lookups(client, self.settings)

        missing = set(CredentialBundle.field_names()) - set(lookups)
        if missing:
            raise ValueError(f"No lookup registered for: {', '.join(sorted(missing))}")

        self._lookups = dict(lookups)
        self._logger = get_logger(__name__).bind(component="credential_resolver")

    async def resolve(self) -> CredentialBundle:
        """Resolve every field and persist the bundle.

        Raises:
            BattlepassError: If any lookup fails; nothing is written in that case.
        """
        cached = self.cache.load() or {}
        resolved: dict[str, str] = {}

        for name in CredentialBundle.field_names():
            if name in cached:
                resolved[name] = cached[name]
                self._logger.debug("credential_resolved", field=name, source="cache")
                continue

            resolved[name] = await self._lookups[name](resolved)
            self._logger.info("credential_resolved", field=name, source="lookup")

        bundle = CredentialBundle(**resolved)
        self.cache.save(bundle)
        return bundle
