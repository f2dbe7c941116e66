"""Courses API routes."""

from fastapi import APIRouter, Depends, status

from ..deps import get_course_service
from ..middleware.auth import CurrentUser, get_current_user
from ...models import CourseCreate, CourseUpdate
from ...services.course_service import CourseService, CoursesView


router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=CoursesView)
def list_courses(
    current_user: CurrentUser = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
) -> CoursesView:
    return service.get_view(current_user.id)


@router.post("", response_model=CoursesView, status_code=status.HTTP_201_CREATED)
def create_course(
    request: CourseCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
) -> CoursesView:
    service.create(current_user.id, request)
    return service.get_view(current_user.id)


@router.patch("/{course_id}", response_model=CoursesView)
def update_course(
    course_id: str,
    request: CourseUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
) -> CoursesView:
    """Update a course; progress outside 0-100 is clamped."""
    service.update(current_user.id, course_id, request)
    return service.get_view(current_user.id)


@router.delete("/{course_id}", response_model=CoursesView)
def delete_course(
    course_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
) -> CoursesView:
    service.delete(current_user.id, course_id)
    return service.get_view(current_user.id)
