"""Readers for files the game client leaves in the local data directory."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from battlepass_tracker.config import Settings
from battlepass_tracker.errors import LocalArtifactMissing, MissingEnvironment, ParseError

SHARD_PATTERN = re.compile(r"https://glz-(.+?)-1.(.+?).a.pvp.net")
SESSION_COOKIE_NAME = "ssid"


def _read_artifact(path: Path | None) -> str:
    if path is None:
        raise MissingEnvironment()
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise LocalArtifactMissing(f"Unable to read {path}: {exc.strerror or exc}", path=str(path)) from exc


def read_shard(settings: Settings) -> str:
    """Extract the shard from the first game server URL in the client log."""

    data = _read_artifact(settings.shooter_log_path)
    match = SHARD_PATTERN.search(data)
    if match is None:
        raise ParseError("Failed to get shard")
    return match.group(1)


def read_session_id(settings: Settings) -> str:
    """Extract the persisted ``ssid`` cookie from the Riot client settings file."""

    data = _read_artifact(settings.riot_settings_path)
    try:
        parsed: Any = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ParseError(f"Failed to parse Riot client settings: {exc}") from exc

    cookies = _dig(parsed, "riot-login", "persist", "session", "cookies")
    if isinstance(cookies, list):
        for cookie in cookies:
            if isinstance(cookie, dict) and cookie.get("name") == SESSION_COOKIE_NAME:
                value = cookie.get("value")
                if isinstance(value, str) and value:
                    return value
    raise ParseError("Failed to get ssid")


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data
