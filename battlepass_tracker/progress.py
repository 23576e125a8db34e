"""Battlepass experience curve."""

from __future__ import annotations

BATTLEPASS_TIER_COUNT = 50
EPILOGUE_TIER_COUNT = 5
EPILOGUE_TIER_XP = 36500


def tier_xp(tier: int) -> int:
    """XP needed to go from ``tier - 1`` to ``tier``. Tier 1 is free."""
    if tier <= 1:
        return 0
    return tier * 750 + 500


def total_xp_required(*, with_epilogue: bool = False) -> int:
    """Total XP to reach the last tier, optionally including the epilogue tiers."""
    total = sum(tier_xp(tier) for tier in range(1, BATTLEPASS_TIER_COUNT + 1))
    if with_epilogue:
        total += EPILOGUE_TIER_COUNT * EPILOGUE_TIER_XP
    return total


def tier_count(*, with_epilogue: bool = False) -> int:
    return BATTLEPASS_TIER_COUNT + (EPILOGUE_TIER_COUNT if with_epilogue else 0)
