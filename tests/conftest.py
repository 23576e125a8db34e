from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
import structlog

from battlepass_tracker.config import Settings
from battlepass_tracker.logging import configure_logging
from battlepass_tracker.models import CredentialBundle

CONTRACT_ID = "07ba5d79-4245-03d8-7996-13baf5d08c1a"

SHOOTER_LOG = """\
[2024.01.01-10.00.00:000][  0]LogInit: Build: ++Ares-Core+release-08.00
[2024.01.01-10.00.01:000][  0]LogPlatformSessionManager: https://glz-eu-1.eu.a.pvp.net/session/v1/sessions
"""

RIOT_SETTINGS = """\
riot-login:
  persist:
    region: "EU"
    session:
      cookies:
        - domain: "auth.riotgames.com"
          name: "tdid"
          value: "tdid-cookie"
        - domain: "auth.riotgames.com"
          name: "ssid"
          value: "ssid-cookie"
"""


@pytest.fixture(autouse=True)
def fresh_logging():
    structlog.reset_defaults()
    configure_logging()
    yield
    structlog.reset_defaults()


@pytest.fixture
def local_app_data(tmp_path: Path) -> Path:
    root = tmp_path / "appdata"
    log_path = root / "VALORANT" / "Saved" / "Logs" / "ShooterGame.log"
    log_path.parent.mkdir(parents=True)
    log_path.write_text(SHOOTER_LOG, encoding="utf-8")

    settings_path = root / "Riot Games" / "Riot Client" / "Data" / "RiotGamesPrivateSettings.yaml"
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(RIOT_SETTINGS, encoding="utf-8")
    return root


@pytest.fixture
def settings(tmp_path: Path, local_app_data: Path) -> Settings:
    return Settings(
        local_app_data=str(local_app_data),
        cache_path=str(tmp_path / "config.yaml"),
        error_log_path=str(tmp_path / "error.log"),
    )


@pytest.fixture
def bundle() -> CredentialBundle:
    return CredentialBundle(
        client_version="release-08.00-shipping-14-2098404",
        shard_id="eu",
        session_id="ssid-cookie",
        access_token="access-token",
        player_id="player-uuid",
        entitlements_token="entitlements-jwt",
        client_platform="platform-blob",
    )


class FakeRiot:
    """In-memory stand-in for every remote service the tracker talks to."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.contracts: list[dict[str, Any]] | Callable[[], list[dict[str, Any]]] = [
            {"ContractDefinitionID": "other-contract", "ContractProgression": {"TotalProgressionEarned": 1}, "ProgressionLevelReached": 1},
            {
                "ContractDefinitionID": CONTRACT_ID,
                "ContractProgression": {"TotalProgressionEarned": 5000},
                "ProgressionLevelReached": 3,
            },
        ]
        self.seasons: list[dict[str, Any]] = [
            {"Type": "episode", "IsActive": True, "EndTime": "2030-03-01T00:00:00Z"},
            {"Type": "act", "IsActive": False, "EndTime": "2020-01-01T00:00:00Z"},
            {"Type": "act", "IsActive": True, "EndTime": "2030-01-10T12:00:00Z"},
        ]

    def count(self, host: str) -> int:
        return sum(1 for call_host, _ in self.calls if call_host == host)

    def handler(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        path = request.url.path
        self.calls.append((host, path))

        if host == "valorant-api.com":
            return httpx.Response(200, json={"status": 200, "data": {"riotClientVersion": "release-08.00-shipping-14"}})
        if host == "auth.riotgames.com" and path == "/authorize":
            location = (
                "https://playvalorant.com/opt_in#access_token=fresh-access-token"
                "&scope=openid&id_token=id-token&token_type=Bearer&expires_in=3600"
            )
            return httpx.Response(303, headers={"Location": location})
        if host == "auth.riotgames.com" and path == "/userinfo":
            return httpx.Response(200, json={"sub": "player-uuid", "country": "deu"})
        if host == "entitlements.auth.riotgames.com":
            return httpx.Response(200, json={"accessToken": "x", "entitlements_token": "fresh-entitlements"})
        if host == "pd.eu.a.pvp.net":
            contracts = self.contracts() if callable(self.contracts) else self.contracts
            return httpx.Response(200, json={"Version": 1, "Subject": "player-uuid", "Contracts": contracts})
        if host == "shared.eu.a.pvp.net":
            return httpx.Response(200, json={"Seasons": self.seasons})
        return httpx.Response(404, json={"error": "unexpected request"})


@pytest.fixture
def fake_riot() -> FakeRiot:
    return FakeRiot()
