"""Command line entry point: print the current battlepass progress."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

import httpx

from battlepass_tracker.api import GameDataClient
from battlepass_tracker.auth import CredentialResolver
from battlepass_tracker.config import Settings, get_settings
from battlepass_tracker.errors import BattlepassError
from battlepass_tracker.logging import configure_logging, get_logger
from battlepass_tracker.pipelines import BattlepassPipeline
from battlepass_tracker.report import build_report, render_report
from battlepass_tracker.storage import CredentialCache, ErrorLog

ERROR_NOTICE = "An error occurred. Check {path} for more information."


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="battlepass",
        description="Show VALORANT battlepass progress and time left in the current act",
    )
    parser.add_argument("--cache", dest="cache_path", default=None, help="Credential cache file (default: config.yaml)")
    parser.add_argument("--error-log", dest="error_log_path", default=None, help="Failure log file (default: error.log)")
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Discard cached credentials and resolve them again",
    )
    parser.add_argument("--log-level", dest="log_level", default=None, help="Log level for stderr diagnostics")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {
        key: value
        for key, value in (
            ("cache_path", args.cache_path),
            ("error_log_path", args.error_log_path),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    if not overrides:
        return settings
    return settings.model_copy(update=overrides)


async def run_report(
    settings: Settings,
    *,
    error_log: ErrorLog,
    refresh: bool = False,
    client: httpx.AsyncClient | None = None,
) -> list[str]:
    """Fetch everything and return the report lines; nothing is printed here."""

    cache = CredentialCache(settings.cache_path)
    if refresh:
        cache.clear()

    async def _run(http: httpx.AsyncClient) -> list[str]:
        pipeline = BattlepassPipeline(
            resolver=CredentialResolver(cache, client=http, settings=settings),
            game_client=GameDataClient(http, settings=settings),
            cache=cache,
            error_log=error_log,
        )
        snapshot = await pipeline.run()
        report = build_report(
            snapshot.progress,
            snapshot.season_end,
            timezone_offset_hours=settings.timezone_offset_hours,
        )
        return render_report(report)

    if client is not None:
        return await _run(client)

    timeout = httpx.Timeout(settings.request_timeout_seconds)
    async with httpx.AsyncClient(timeout=timeout) as http:
        return await _run(http)


def handle_error(error_log: ErrorLog, message: str) -> int:
    """Record ``message`` and tell the user where to find it."""

    error_log.append(message)
    print(ERROR_NOTICE.format(path=error_log.path))
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    error_log = ErrorLog(settings.error_log_path)
    error_log.reset()

    try:
        lines = asyncio.run(run_report(settings, error_log=error_log, refresh=args.refresh))
    except BattlepassError as exc:
        logger.error("battlepass_lookup_failed", error=exc.message, kind=type(exc).__name__)
        return handle_error(error_log, exc.message)
    except httpx.HTTPError as exc:
        logger.error("network_error", error=str(exc), kind=type(exc).__name__)
        return handle_error(error_log, str(exc) or type(exc).__name__)
    except Exception as exc:
        logger.exception("unexpected_error", kind=type(exc).__name__)
        return handle_error(error_log, str(exc) or type(exc).__name__)

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
