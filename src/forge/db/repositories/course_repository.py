"""Repository for courses."""

from ...models import Course
from .base import UserScopedRepository


class CourseRepository(UserScopedRepository[Course]):
    table = "courses"
    model = Course
