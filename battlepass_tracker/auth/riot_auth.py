"""Lookups against the public version API and Riot's identity services."""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx

from battlepass_tracker.config import Settings
from battlepass_tracker.errors import AuthExchangeError, UpstreamDataError


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _extract(payload: Any, *keys: str) -> str | None:
    for key in keys:
        if not isinstance(payload, dict):
            return None
        payload = payload.get(key)
    if isinstance(payload, str) and payload:
        return payload
    return None


async def fetch_client_version(client: httpx.AsyncClient, settings: Settings) -> str:
    response = await client.get(settings.version_url)
    version = _extract(_json_body(response), "data", "riotClientVersion")
    if version is None:
        raise UpstreamDataError("Failed to get client version", status_code=response.status_code)
    return version


async def fetch_access_token(client: httpx.AsyncClient, settings: Settings, session_id: str) -> str:
    """Trade the ``ssid`` cookie for an access token via the implicit grant redirect.

    The authorize endpoint answers with a redirect to the registered callback whose
    URL fragment carries ``access_token``; the redirect is inspected, not followed.
    """

    params = {
        "redirect_uri": settings.auth_redirect_uri,
        "client_id": settings.auth_client_id,
        "response_type": "token id_token",
        "nonce": "1",
        "scope": "account openid",
    }
    response = await client.get(
        settings.authorize_url,
        params=params,
        headers={
            "Cookie": f"ssid={session_id}",
            "User-Agent": settings.user_agent,
        },
        follow_redirects=False,
    )

    location = response.headers.get("location")
    if not location or not location.startswith(settings.auth_redirect_uri):
        raise AuthExchangeError("Failed to get access token", status_code=response.status_code)

    fragment = parse_qs(urlsplit(location).fragment)
    access_token = fragment.get("access_token", [None])[0]
    if not access_token:
        raise AuthExchangeError("Failed to get access token")
    return access_token


async def fetch_player_id(client: httpx.AsyncClient, settings: Settings, access_token: str) -> str:
    response = await client.post(
        settings.userinfo_url,
        headers={
            "Authorization": f"Bearer {access_token}",
            "User-Agent": settings.user_agent,
        },
    )
    player_id = _extract(_json_body(response), "sub")
    if player_id is None:
        raise UpstreamDataError("Failed to get puuid", status_code=response.status_code)
    return player_id


async def fetch_entitlements_token(client: httpx.AsyncClient, settings: Settings, access_token: str) -> str:
    response = await client.post(
        settings.entitlements_url,
        headers={
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
            "User-Agent": settings.user_agent,
        },
    )
    token = _extract(_json_body(response), "entitlements_token")
    if token is None:
        raise UpstreamDataError("Failed to get entitlements token", status_code=response.status_code)
    return token
