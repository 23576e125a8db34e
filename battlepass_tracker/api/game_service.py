"""Client helpers for the shard-scoped game data services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, MutableMapping

import httpx

from battlepass_tracker.config import Settings, get_settings
from battlepass_tracker.errors import ProgressNotFound, SeasonNotFound, UpstreamDataError
from battlepass_tracker.logging import get_logger
from battlepass_tracker.models import CredentialBundle, RewardTrackRecord, SeasonRecord


@dataclass
class ServiceRequest:
    """Description of a request to send to a game data host."""

    method: str
    url: str
    headers: Mapping[str, str] | None = None


class GameDataClient:
    """Thin wrapper around httpx for the player data and shared content hosts.

    The client only owns transport defaults; identity headers are built per call
    from the CredentialBundle passed in, so a re-resolved bundle takes effect on
    the next request.
    """

    def __init__(self, client: httpx.AsyncClient, *, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._logger = get_logger(__name__).bind(component="game_data_client")

    def pd_url(self, credentials: CredentialBundle, path: str) -> str:
        base = self.settings.pd_base_url_template.format(shard=credentials.shard_id)
        return f"{base.rstrip('/')}/{path.lstrip('/')}"

    def shared_url(self, credentials: CredentialBundle, path: str) -> str:
        base = self.settings.shared_base_url_template.format(shard=credentials.shard_id)
        return f"{base.rstrip('/')}/{path.lstrip('/')}"

    def auth_headers(self, credentials: CredentialBundle) -> dict[str, str]:
        return {
            "Accept": "*/*",
            "Authorization": f"Bearer {credentials.access_token}",
            "User-Agent": self.settings.user_agent,
            "X-Riot-ClientVersion": credentials.client_version,
            "X-Riot-Entitlements-JWT": credentials.entitlements_token,
            "X-Riot-ClientPlatform": credentials.client_platform,
        }

    async def request(self, request: ServiceRequest) -> httpx.Response:
        """Perform a raw request."""

        headers: MutableMapping[str, str] = {}
        if request.headers:
            headers |= request.headers

        self._logger.debug(
            "service_request",
            method=request.method,
            url=request.url,
        )

        return await self._client.request(
            request.method,
            request.url,
            headers=headers,
        )

    async def request_json(self, request: ServiceRequest) -> Any:
        """Perform a request and return the JSON body, raising for HTTP errors."""

        response = await self.request(request)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._logger.warning(
                "service_request_failed",
                status_code=exc.response.status_code,
                url=str(exc.request.url),
            )
            raise
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamDataError(f"Non-JSON response from {request.url}") from exc

    async def fetch_progress(self, credentials: CredentialBundle, *, allow_retry: bool) -> RewardTrackRecord | None:
        """Return the battlepass contract for the current season.

        A rejected request is treated like a missing contract: both usually mean
        the cached credentials are stale.

        Returns:
            The contract record, or ``None`` when it is missing and ``allow_retry`` is set.

        Raises:
            ProgressNotFound: If the contract is missing and ``allow_retry`` is not set.
        """
        request = ServiceRequest(
            method="GET",
            url=self.pd_url(credentials, f"contracts/v1/contracts/{credentials.player_id}"),
            headers=self.auth_headers(credentials),
        )
        response = await self.request(request)
        try:
            payload = response.json()
        except ValueError:
            payload = None

        contracts = payload.get("Contracts") if isinstance(payload, dict) else None
        definition_id = self.settings.contract_definition_id
        for contract in contracts or ():
            if isinstance(contract, dict) and contract.get("ContractDefinitionID") == definition_id:
                record = RewardTrackRecord.from_contract(contract)
                self._logger.info("progress_found", level_reached=record.level_reached)
                return record

        self._logger.warning(
            "progress_not_found",
            status_code=response.status_code,
            contract_count=len(contracts) if isinstance(contracts, list) else None,
            allow_retry=allow_retry,
        )
        if allow_retry:
            return None
        raise ProgressNotFound()

    async def fetch_active_season_end(self, credentials: CredentialBundle) -> datetime:
        """Return the end time of the currently active act.

        Raises:
            SeasonNotFound: If no season entry is both active and of type ``act``.
        """
        payload = await self.request_json(
            ServiceRequest(
                method="GET",
                url=self.shared_url(credentials, "content-service/v3/content"),
                headers=self.auth_headers(credentials),
            )
        )

        seasons = payload.get("Seasons") if isinstance(payload, dict) else None
        for season in seasons or ():
            if isinstance(season, dict) and season.get("IsActive") and season.get("Type") == "act":
                record = SeasonRecord.from_payload(season)
                self._logger.info("active_act_found", end_time=record.end_time.isoformat())
                return record.end_time

        raise SeasonNotFound()
