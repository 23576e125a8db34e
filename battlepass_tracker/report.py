"""Console report for battlepass progress."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from battlepass_tracker.models import RewardTrackRecord
from battlepass_tracker import progress

REPORT_TITLE = "VALORANT Battlepass Progress:"


@dataclass(frozen=True, slots=True)
class TrackProgress:
    """Progress against one variant of the XP curve."""

    percentage: float
    xp_remaining: int
    level_reached: int
    tier_count: int

    @classmethod
    def compute(cls, earned: int, required: int, level_reached: int, tier_count: int) -> "TrackProgress":
        return cls(
            percentage=min(100.0, earned / required * 100),
            xp_remaining=max(0, required - earned),
            level_reached=level_reached,
            tier_count=tier_count,
        )

    @property
    def tier_label(self) -> str:
        return f"tier {self.level_reached}/{self.tier_count}"


@dataclass(frozen=True, slots=True)
class TimeRemaining:
    negative: bool
    days: int
    hours: int
    minutes: int

    @classmethod
    def from_delta(cls, delta: timedelta) -> "TimeRemaining":
        total_seconds = int(delta.total_seconds())
        negative = total_seconds < 0
        days, rest = divmod(abs(total_seconds), 86400)
        hours, rest = divmod(rest, 3600)
        minutes = rest // 60
        return cls(negative=negative, days=days, hours=hours, minutes=minutes)

    def __str__(self) -> str:
        sign = "-" if self.negative else ""
        return f"{sign}{self.days} days {self.hours} hours {self.minutes} minutes"


@dataclass(frozen=True, slots=True)
class BattlepassReport:
    base: TrackProgress
    with_epilogue: TrackProgress
    time_remaining: TimeRemaining


def build_report(
    record: RewardTrackRecord,
    season_end: datetime,
    *,
    now: datetime | None = None,
    timezone_offset_hours: int = 2,
) -> BattlepassReport:
    """Compute clamped percentages, remaining XP and time left in the act.

    Time remaining is measured from ``now`` shifted by ``timezone_offset_hours``
    and is not clamped, so a finished act shows a negative duration.
    """
    earned = record.total_progression_earned
    now = now or datetime.now(timezone.utc)
    reference = now + timedelta(hours=timezone_offset_hours)

    return BattlepassReport(
        base=TrackProgress.compute(
            earned,
            progress.total_xp_required(),
            record.level_reached,
            progress.tier_count(),
        ),
        with_epilogue=TrackProgress.compute(
            earned,
            progress.total_xp_required(with_epilogue=True),
            record.level_reached,
            progress.tier_count(with_epilogue=True),
        ),
        time_remaining=TimeRemaining.from_delta(season_end - reference),
    )


def render_report(report: BattlepassReport) -> list[str]:
    lines = [REPORT_TITLE, "-" * 30]
    for heading, track in (("Without epilogue:", report.base), ("With epilogue:", report.with_epilogue)):
        lines.append(heading)
        lines.append(f"\tProgress: {track.percentage:.2f}% ({track.tier_label})")
        lines.append(f"\tXP remaining: {track.xp_remaining}")
    lines.append("")
    lines.append(f"Time remaining: {report.time_remaining}")
    return lines
