"""Level resolution from a fixed ascending XP threshold table."""

from typing import List, Optional

from ..models.gamification import LevelInfo, LevelTier
from .coercion import to_int


LEVEL_TIERS: List[LevelTier] = [
    LevelTier(level=1, name="Beginner", min_xp=0),
    LevelTier(level=2, name="Apprentice", min_xp=500),
    LevelTier(level=3, name="Achiever", min_xp=1500),
    LevelTier(level=4, name="Master", min_xp=3000),
    LevelTier(level=5, name="Legend", min_xp=5000),
]


def get_level(xp: int) -> LevelTier:
    """Highest tier whose threshold does not exceed ``xp``."""
    xp = to_int(xp)
    current = LEVEL_TIERS[0]
    for tier in LEVEL_TIERS:
        if tier.min_xp <= xp:
            current = tier
    return current


def get_next_level(xp: int) -> Optional[LevelTier]:
    """Smallest tier whose threshold exceeds ``xp``, None at the top tier."""
    xp = to_int(xp)
    for tier in LEVEL_TIERS:
        if tier.min_xp > xp:
            return tier
    return None


def level_progress(xp: int) -> float:
    """
    Linear progress from the current tier's threshold to the next one.

    Returns:
        Percentage in [0, 100]; 100 at the top tier
    """
    xp = to_int(xp)
    current = get_level(xp)
    nxt = get_next_level(xp)
    if nxt is None:
        return 100.0

    span = nxt.min_xp - current.min_xp
    progress = (xp - current.min_xp) / span * 100
    return round(max(0.0, min(100.0, progress)), 1)


def calculate_level(xp: int) -> LevelInfo:
    """
    Calculate level information from total XP.

    Args:
        xp: Total XP earned

    Returns:
        LevelInfo with the current tier, next tier and progress
    """
    xp = max(0, to_int(xp))
    current = get_level(xp)
    nxt = get_next_level(xp)

    return LevelInfo(
        level=current.level,
        name=current.name,
        min_xp=current.min_xp,
        xp=xp,
        next_level=nxt,
        xp_to_next=(nxt.min_xp - xp) if nxt else None,
        progress_percent=level_progress(xp),
    )
