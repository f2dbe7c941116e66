"""Gamification data models for streaks, XP, levels and achievements."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class LevelTier(BaseModel):
    """A named bracket of the XP threshold table."""

    level: int = Field(..., description="Tier number, starting at 1")
    name: str = Field(..., description="Display name of the tier")
    min_xp: int = Field(..., description="XP needed to enter the tier")


class LevelInfo(BaseModel):
    """Information about a user's level."""

    level: int = Field(..., description="Current tier number")
    name: str = Field(..., description="Current tier name")
    min_xp: int = Field(..., description="XP threshold of the current tier")
    xp: int = Field(..., description="Total XP")
    next_level: Optional[LevelTier] = Field(None, description="Next tier, None at the top")
    xp_to_next: Optional[int] = Field(None, description="XP missing to reach the next tier")
    progress_percent: float = Field(..., description="Progress to next tier (0-100)")


class StreakInfo(BaseModel):
    """Consecutive-day streak over a set of dated events."""

    current: int = Field(default=0, description="Current streak in days")
    longest: int = Field(default=0, description="Longest run of consecutive days")
    last_activity_date: Optional[str] = Field(None, description="Most recent event date")


class Achievement(BaseModel):
    """Achievement definition."""

    id: str = Field(..., description="Unique achievement identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="How to unlock it")
    icon: str = Field(..., description="Emoji glyph")
    condition_type: str = Field(..., description="workout_count, streak, total_minutes or exercise_count")
    condition_value: int = Field(..., description="Threshold for the condition")
    display_order: int = Field(default=0)


class AchievementWithStatus(BaseModel):
    """Achievement with its unlock status for the user."""

    achievement: Achievement
    unlocked: bool = Field(default=False, description="Qualifies now or was unlocked before")
    unlocked_at: Optional[datetime] = Field(None, description="When it was first unlocked")


class WeeklyBucket(BaseModel):
    """Completions on one day of the current week."""

    day: str = Field(..., description="Short weekday name (Mon..Sun)")
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    habits: int = 0
    todos: int = 0
    workouts: int = 0


class GamificationSummary(BaseModel):
    """XP, level, streak and achievements derived from the user's records."""

    total_xp: int = 0
    level: LevelInfo
    streak: StreakInfo
    achievements: List[AchievementWithStatus] = Field(default_factory=list)
    achievements_unlocked: int = 0


class UnlockedAchievement(BaseModel):
    """Persisted record of the first time an achievement qualified."""

    id: str
    user_id: str
    achievement_id: str
    unlocked_at: datetime
    created_at: Optional[str] = None
