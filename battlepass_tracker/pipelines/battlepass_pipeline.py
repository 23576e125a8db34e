"""Battlepass lookup orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from battlepass_tracker.api import GameDataClient
from battlepass_tracker.auth import CredentialResolver
from battlepass_tracker.logging import get_logger
from battlepass_tracker.models import CredentialBundle, RewardTrackRecord
from battlepass_tracker.storage import CredentialCache, ErrorLog

RETRY_MESSAGE = "Retrying..."


@dataclass(slots=True)
class BattlepassSnapshot:
    """Everything the report needs, fetched in one run."""

    credentials: CredentialBundle
    progress: RewardTrackRecord
    season_end: datetime


class BattlepassPipeline:
    """Glue credential resolution and the game data fetches together.

    The only recovery in the flow: when the battlepass contract is missing the
    cached credentials are assumed stale, so the cache is cleared, credentials are
    resolved again and the fetch is attempted once more without a retry.
    """

    def __init__(
        self,
        *,
        resolver: CredentialResolver,
        game_client: GameDataClient,
        cache: CredentialCache,
        error_log: ErrorLog,
    ) -> None:
        self.resolver = resolver
        self.game_client = game_client
        self.cache = cache
        self.error_log = error_log
        self._logger = get_logger(__name__).bind(component="battlepass_pipeline")

    async def run(self) -> BattlepassSnapshot:
        credentials = await self.resolver.resolve()
        record = await self.game_client.fetch_progress(credentials, allow_retry=True)

        if record is None:
            self._logger.warning("progress_retry", reason="contract_missing")
            self.error_log.append(RETRY_MESSAGE)
            self.cache.clear()
            credentials = await self.resolver.resolve()
            record = await self.game_client.fetch_progress(credentials, allow_retry=False)

        season_end = await self.game_client.fetch_active_season_end(credentials)
        return BattlepassSnapshot(credentials=credentials, progress=record, season_end=season_end)
