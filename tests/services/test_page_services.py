"""Tests for the habits, todos, courses and gym services."""

from datetime import date, timedelta

import pytest

from forge.exceptions import BackendError, NotFoundError, ValidationError
from forge.models import (
    CourseCreate,
    CourseUpdate,
    ExerciseCreate,
    HabitCreate,
    HabitUpdate,
    TodoCreate,
    TodoUpdate,
    WorkoutCreate,
)
from forge.services import CourseService, GymService, HabitService, TodoService


TODAY = date(2026, 2, 16)


# ============================================================================
# Habits
# ============================================================================

@pytest.fixture
def habit_service(backend, settings):
    return HabitService(backend, settings)


class TestHabitService:
    """Tests for the habits view and mutations."""

    def test_empty_view(self, habit_service, user_id):
        view = habit_service.get_view(user_id, today=TODAY)

        assert view.selected_date == "2026-02-16"
        assert view.habits == []
        assert view.overall_streak == 0

    def test_create_trims_and_defaults(self, habit_service, user_id):
        habit = habit_service.create(user_id, HabitCreate(name="  Read  ", icon=""))

        assert habit.name == "Read"
        assert habit.icon == "✅"
        assert habit.frequency.value == "daily"

    def test_blank_name_rejected(self, habit_service, user_id):
        with pytest.raises(ValidationError):
            habit_service.create(user_id, HabitCreate(name="   "))

    def test_update_blank_icon_falls_back_to_default(self, habit_service, user_id):
        habit = habit_service.create(user_id, HabitCreate(name="Read", icon="📚"))

        updated = habit_service.update(user_id, habit.id, HabitUpdate(icon="  "))

        assert updated.icon == "✅"
        assert habit_service.update(user_id, habit.id, HabitUpdate(icon=" 🏃 ")).icon == "🏃"

    def test_toggle_reflected_in_view(self, habit_service, user_id):
        habit = habit_service.create(user_id, HabitCreate(name="Read"))
        for offset in range(3):
            habit_service.toggle_log(user_id, habit.id, TODAY - timedelta(days=offset))

        view = habit_service.get_view(user_id, today=TODAY)

        assert view.habits[0].completed is True
        assert view.habits[0].streak == 3
        assert view.overall_streak == 3
        assert view.logged_dates == ["2026-02-16", "2026-02-15", "2026-02-14"]

    def test_toggle_twice_restores_state(self, habit_service, user_id):
        habit = habit_service.create(user_id, HabitCreate(name="Read"))

        assert habit_service.toggle_log(user_id, habit.id, TODAY) is True
        assert habit_service.toggle_log(user_id, habit.id, TODAY) is False

        view = habit_service.get_view(user_id, today=TODAY)
        assert view.habits[0].completed is False
        assert view.logs == []

    def test_selected_day_controls_completion(self, habit_service, user_id):
        habit = habit_service.create(user_id, HabitCreate(name="Read"))
        habit_service.toggle_log(user_id, habit.id, TODAY - timedelta(days=1))

        today_view = habit_service.get_view(user_id, today=TODAY)
        yesterday_view = habit_service.get_view(user_id, TODAY - timedelta(days=1), today=TODAY)

        assert today_view.habits[0].completed is False
        assert yesterday_view.habits[0].completed is True

    def test_logs_outside_window_ignored(self, habit_service, user_id):
        habit = habit_service.create(user_id, HabitCreate(name="Read"))
        habit_service.toggle_log(user_id, habit.id, TODAY - timedelta(days=45))

        assert habit_service.get_view(user_id, today=TODAY).logs == []

    def test_toggle_unknown_habit(self, habit_service, user_id):
        with pytest.raises(NotFoundError):
            habit_service.toggle_log(user_id, "missing", TODAY)

    def test_update(self, habit_service, user_id):
        habit = habit_service.create(user_id, HabitCreate(name="Read"))

        updated = habit_service.update(user_id, habit.id, HabitUpdate(name="Read 20 pages"))

        assert updated.name == "Read 20 pages"

    def test_delete_removes_logs(self, habit_service, user_id, backend):
        habit = habit_service.create(user_id, HabitCreate(name="Read"))
        habit_service.toggle_log(user_id, habit.id, TODAY)

        habit_service.delete(user_id, habit.id)

        assert backend.select("habit_logs") == []
        with pytest.raises(NotFoundError):
            habit_service.delete(user_id, habit.id)


# ============================================================================
# Todos
# ============================================================================

class TestTodoService:
    """Tests for todos."""

    def test_create_defaults_due_date_to_today(self, backend, user_id):
        service = TodoService(backend)

        todo = service.create(user_id, TodoCreate(title="Ship it"), today=TODAY)

        assert todo.due_date == "2026-02-16"
        assert todo.completed is False
        assert todo.priority.value == "medium"
        assert todo.category == "general"

    def test_blank_title_rejected(self, backend, user_id):
        with pytest.raises(ValidationError):
            TodoService(backend).create(user_id, TodoCreate(title=" "))

    def test_view_counts(self, backend, user_id):
        service = TodoService(backend)
        a = service.create(user_id, TodoCreate(title="a", due_date=date(2026, 2, 20)))
        service.create(user_id, TodoCreate(title="b", due_date=date(2026, 2, 18)))
        service.set_completed(user_id, a.id, True)

        view = service.get_view(user_id)

        assert [t.title for t in view.todos] == ["b", "a"]
        assert view.pending == 1
        assert view.completed == 1

    def test_set_completed_twice(self, backend, user_id):
        service = TodoService(backend)
        todo = service.create(user_id, TodoCreate(title="a"))

        service.set_completed(user_id, todo.id, True)
        assert service.set_completed(user_id, todo.id, True).completed is True

    def test_update_clears_due_date(self, backend, user_id):
        service = TodoService(backend)
        todo = service.create(user_id, TodoCreate(title="a"))

        updated = service.update(user_id, todo.id, TodoUpdate(due_date=None, description="  "))

        assert updated.due_date is None
        assert updated.description is None

    def test_missing_todo(self, backend, user_id):
        service = TodoService(backend)
        with pytest.raises(NotFoundError):
            service.set_completed(user_id, "missing", True)
        with pytest.raises(NotFoundError):
            service.delete(user_id, "missing")


# ============================================================================
# Courses
# ============================================================================

class TestCourseService:
    def test_average_progress(self, backend, user_id):
        service = CourseService(backend)
        service.create(user_id, CourseCreate(name="Algorithms", progress=100))
        service.create(user_id, CourseCreate(name="Databases", progress=35))

        view = service.get_view(user_id)

        assert view.average_progress == 68
        assert view.completed == 1

    def test_progress_clamped(self, backend, user_id):
        service = CourseService(backend)
        course = service.create(user_id, CourseCreate(name="Algorithms", progress=150))
        assert course.progress == 100

        updated = service.update(user_id, course.id, CourseUpdate(progress=-5))
        assert updated.progress == 0

    def test_empty_view(self, backend, user_id):
        view = CourseService(backend).get_view(user_id)
        assert view.average_progress == 0


# ============================================================================
# Gym
# ============================================================================

class TestGymService:
    """Tests for workout logging."""

    def test_create_skips_blank_exercises(self, backend, user_id):
        service = GymService(backend)

        workout = service.create(user_id, WorkoutCreate(
            date=TODAY,
            duration=45,
            exercises=[ExerciseCreate(name="Squat", sets=3, reps=5, weight=100), ExerciseCreate(name="  ")],
        ))

        assert [e.name for e in workout.exercises] == ["Squat"]

    @pytest.mark.parametrize("payload", [
        {"duration": 45},
        {"date": TODAY},
        {"date": TODAY, "duration": 0},
        {"date": TODAY, "duration": -10},
    ])
    def test_date_and_duration_required(self, backend, user_id, payload):
        with pytest.raises(ValidationError, match="Date and duration required"):
            GymService(backend).create(user_id, WorkoutCreate(**payload))

    def test_view_includes_stats(self, backend, user_id):
        service = GymService(backend)
        service.create(user_id, WorkoutCreate(
            date=TODAY, duration=30, exercises=[ExerciseCreate(name="Row")]
        ))

        view = service.get_view(user_id, today=TODAY)

        assert len(view.workouts) == 1
        assert view.stats.total_xp == 30 * 2 + 10
        assert view.stats.streak.current == 1

    def test_backend_failure_leaves_no_workout(self, backend, user_id, monkeypatch):
        service = GymService(backend)

        def fail(*args, **kwargs):
            raise BackendError("insert failed", operation="insert", table="workout_exercises")

        monkeypatch.setattr(backend, "insert_many", fail)

        with pytest.raises(BackendError):
            service.create(user_id, WorkoutCreate(
                date=TODAY, duration=30, exercises=[ExerciseCreate(name="Row")]
            ))
        assert service.get_view(user_id, today=TODAY).workouts == []

    def test_delete_missing(self, backend, user_id):
        with pytest.raises(NotFoundError):
            GymService(backend).delete(user_id, "missing")
