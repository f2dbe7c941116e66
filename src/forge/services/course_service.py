"""Course progress view."""

import logging
from typing import List

from pydantic import BaseModel

from ..db.backends import Backend
from ..db.repositories import CourseRepository
from ..exceptions import NotFoundError, ValidationError
from ..models import Course, CourseCreate, CourseUpdate


logger = logging.getLogger(__name__)


class CoursesView(BaseModel):
    courses: List[Course]
    average_progress: int = 0
    completed: int = 0


def average_progress(courses: List[Course]) -> int:
    """Mean progress over all courses, rounded; 0 when there are none."""
    if not courses:
        return 0
    return round(sum(c.progress for c in courses) / len(courses))


class CourseService:
    """Service for managing courses."""

    def __init__(self, backend: Backend):
        self.courses = CourseRepository(backend)

    def get_view(self, user_id: str) -> CoursesView:
        courses = self.courses.list(user_id)
        return CoursesView(
            courses=courses,
            average_progress=average_progress(courses),
            completed=sum(1 for c in courses if c.progress >= 100),
        )

    def create(self, user_id: str, request: CourseCreate) -> Course:
        name = request.name.strip()
        if not name:
            raise ValidationError("Course name is required", field="name")

        description = (request.description or "").strip() or None
        course = self.courses.create(user_id, {
            "name": name,
            "description": description,
            "progress": request.progress,
        })
        logger.info(f"Created course {course.id} for user {user_id}")
        return course

    def update(self, user_id: str, course_id: str, request: CourseUpdate) -> Course:
        """Update name, description or progress (clamped to 0-100)."""
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
            if not changes["name"]:
                raise ValidationError("Course name is required", field="name")

        course = self.courses.update(user_id, course_id, changes)
        if course is None:
            raise NotFoundError("Course", course_id)
        return course

    def delete(self, user_id: str, course_id: str) -> None:
        if not self.courses.delete(user_id, course_id):
            raise NotFoundError("Course", course_id)
        logger.info(f"Deleted course {course_id}")
