from datetime import datetime, timezone

import httpx
import pytest

from battlepass_tracker.api.game_service import GameDataClient, ServiceRequest
from battlepass_tracker.errors import ProgressNotFound, SeasonNotFound
from battlepass_tracker.models import RewardTrackRecord


@pytest.mark.asyncio
async def test_fetch_progress_builds_url_and_headers(settings, bundle, fake_riot):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["headers"] = dict(request.headers)
        return fake_riot.handler(request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        service = GameDataClient(client, settings=settings)
        record = await service.fetch_progress(bundle, allow_retry=True)

    assert captured["url"] == "https://pd.eu.a.pvp.net/contracts/v1/contracts/player-uuid"
    assert captured["headers"]["authorization"] == "Bearer access-token"
    assert captured["headers"]["x-riot-clientversion"] == bundle.client_version
    assert captured["headers"]["x-riot-entitlements-jwt"] == "entitlements-jwt"
    assert captured["headers"]["x-riot-clientplatform"] == "platform-blob"
    assert record == RewardTrackRecord(definition_id=settings.contract_definition_id, total_progression_earned=5000, level_reached=3)


@pytest.mark.asyncio
async def test_fetch_progress_missing_contract_with_retry_returns_none(settings, bundle, fake_riot):
    fake_riot.contracts = []

    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_riot.handler)) as client:
        service = GameDataClient(client, settings=settings)
        assert await service.fetch_progress(bundle, allow_retry=True) is None


@pytest.mark.asyncio
async def test_fetch_progress_missing_contract_without_retry_raises(settings, bundle, fake_riot):
    fake_riot.contracts = []

    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_riot.handler)) as client:
        service = GameDataClient(client, settings=settings)
        with pytest.raises(ProgressNotFound):
            await service.fetch_progress(bundle, allow_retry=False)


@pytest.mark.asyncio
async def test_fetch_progress_rejected_token_counts_as_missing(settings, bundle):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"httpStatus": 400, "errorCode": "BAD_CLAIMS"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        service = GameDataClient(client, settings=settings)
        assert await service.fetch_progress(bundle, allow_retry=True) is None


@pytest.mark.asyncio
async def test_fetch_active_season_end_picks_active_act(settings, bundle, fake_riot):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_riot.handler)) as client:
        service = GameDataClient(client, settings=settings)
        end = await service.fetch_active_season_end(bundle)

    assert end == datetime(2030, 1, 10, 12, 0, tzinfo=timezone.utc)
    assert fake_riot.calls[-1] == ("shared.eu.a.pvp.net", "/content-service/v3/content")


@pytest.mark.asyncio
async def test_fetch_active_season_end_without_active_act(settings, bundle, fake_riot):
    fake_riot.seasons = [{"Type": "episode", "IsActive": True, "EndTime": "2030-03-01T00:00:00Z"}]

    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_riot.handler)) as client:
        service = GameDataClient(client, settings=settings)
        with pytest.raises(SeasonNotFound):
            await service.fetch_active_season_end(bundle)


@pytest.mark.asyncio
async def test_request_json_raises_for_http_errors(settings):
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(503))) as client:
        service = GameDataClient(client, settings=settings)
        with pytest.raises(httpx.HTTPStatusError):
            await service.request_json(ServiceRequest(method="GET", url="https://shared.eu.a.pvp.net/x"))
