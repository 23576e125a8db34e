"""Battlepass Tracker: VALORANT battlepass progress from the command line."""

from __future__ import annotations

from .api.game_service import GameDataClient, ServiceRequest
from .auth import CredentialResolver
from .config import Settings, get_settings
from .models import CredentialBundle, RewardTrackRecord, SeasonRecord
from .pipelines import BattlepassPipeline
from .storage import CredentialCache, ErrorLog

__version__ = "0.1.0"

__all__ = [
    "BattlepassPipeline",
    "CredentialBundle",
    "CredentialCache",
    "CredentialResolver",
    "ErrorLog",
    "GameDataClient",
    "RewardTrackRecord",
    "SeasonRecord",
    "ServiceRequest",
    "Settings",
    "get_settings",
]
