"""Record and request models for habits, todos, courses and workouts.

Records mirror the rows stored by the backend. Every row carries the owning
``user_id`` and a ``created_at`` timestamp used for default ordering.
"""

from datetime import date as date_type
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Frequency(str, Enum):
    """How often a habit is meant to be done."""
    DAILY = "daily"
    WEEKLY = "weekly"


class Priority(str, Enum):
    """Todo priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


DEFAULT_HABIT_ICON = "✅"
DEFAULT_TODO_CATEGORY = "general"


def _zero_if_none(v):
    return 0 if v is None else v


def clamp_progress(v: Optional[int]) -> Optional[int]:
    """Clamp a course progress value into 0-100."""
    if v is None:
        return None
    return max(0, min(100, int(v)))


# =============================================================================
# Habits
# =============================================================================

class Habit(BaseModel):
    """A tracked habit."""

    id: str = Field(..., description="Habit ID")
    user_id: str = Field(..., description="Owner")
    name: str = Field(..., description="Display name")
    icon: str = Field(default=DEFAULT_HABIT_ICON, description="Emoji glyph")
    frequency: Frequency = Field(default=Frequency.DAILY, description="daily or weekly")
    created_at: Optional[str] = None


class HabitCreate(BaseModel):
    """Request model for creating a habit."""
    name: str = Field(..., max_length=100, description="Habit name")
    icon: str = Field(default=DEFAULT_HABIT_ICON, max_length=16, description="Emoji glyph")
    frequency: Frequency = Field(default=Frequency.DAILY)


class HabitUpdate(BaseModel):
    """Request model for a partial habit update."""
    name: Optional[str] = Field(None, max_length=100)
    icon: Optional[str] = Field(None, max_length=16)
    frequency: Optional[Frequency] = None


class HabitLog(BaseModel):
    """Completion of a habit on a calendar date."""

    id: str
    user_id: str
    habit_id: str
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    completed: bool = True
    created_at: Optional[str] = None


class HabitLogToggle(BaseModel):
    """Request model for toggling a habit log."""
    date: Optional[date_type] = Field(None, description="Day to toggle (defaults to today)")


# =============================================================================
# Todos
# =============================================================================

class Todo(BaseModel):
    """A todo item."""

    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[str] = Field(None, description="Date in YYYY-MM-DD format")
    priority: Priority = Priority.MEDIUM
    category: str = DEFAULT_TODO_CATEGORY
    completed: bool = False
    created_at: Optional[str] = None


class TodoCreate(BaseModel):
    """Request model for creating a todo."""
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[date_type] = Field(None, description="Defaults to today")
    priority: Priority = Priority.MEDIUM
    category: str = Field(default=DEFAULT_TODO_CATEGORY, max_length=50)


class TodoUpdate(BaseModel):
    """Request model for a partial todo update."""
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[date_type] = None
    priority: Optional[Priority] = None
    category: Optional[str] = Field(None, max_length=50)
    completed: Optional[bool] = None


class TodoCompletion(BaseModel):
    """Request model for setting a todo's completion state."""
    completed: bool


# =============================================================================
# Courses
# =============================================================================

class Course(BaseModel):
    """A course with a 0-100 progress percentage."""

    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    progress: int = 0
    created_at: Optional[str] = None

    @field_validator("progress", mode="before")
    @classmethod
    def default_progress(cls, v):
        return _zero_if_none(v)


class CourseCreate(BaseModel):
    """Request model for creating a course."""
    name: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    progress: int = 0

    @field_validator("progress", mode="before")
    @classmethod
    def clamp(cls, v):
        return clamp_progress(v) or 0


class CourseUpdate(BaseModel):
    """Request model for a partial course update."""
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    progress: Optional[int] = None

    @field_validator("progress", mode="before")
    @classmethod
    def clamp(cls, v):
        return clamp_progress(v)


# =============================================================================
# Workouts
# =============================================================================

class WorkoutExercise(BaseModel):
    """An exercise performed during a workout."""

    id: str
    user_id: str
    workout_id: str
    name: str = ""
    sets: int = 0
    reps: int = 0
    weight: float = 0.0
    created_at: Optional[str] = None

    @field_validator("sets", "reps", "weight", mode="before")
    @classmethod
    def default_numbers(cls, v):
        return _zero_if_none(v)


class Workout(BaseModel):
    """A gym session and the exercises logged with it."""

    id: str
    user_id: str
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    duration: int = Field(default=0, description="Duration in minutes")
    notes: Optional[str] = None
    created_at: Optional[str] = None
    exercises: List[WorkoutExercise] = Field(default_factory=list)

    @field_validator("duration", mode="before")
    @classmethod
    def default_duration(cls, v):
        return _zero_if_none(v)


class ExerciseCreate(BaseModel):
    """Request model for one exercise of a new workout."""
    name: str = Field(..., max_length=100)
    sets: int = Field(default=0, ge=0, le=100)
    reps: int = Field(default=0, ge=0, le=1000)
    weight: float = Field(default=0.0, ge=0, le=2000)


class WorkoutCreate(BaseModel):
    """Request model for logging a workout."""
    date: Optional[date_type] = None
    duration: Optional[int] = Field(None, le=1440, description="Duration in minutes")
    notes: Optional[str] = Field(None, max_length=1000)
    exercises: List[ExerciseCreate] = Field(default_factory=list)
