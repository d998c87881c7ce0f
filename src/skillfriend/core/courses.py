"""Courses section: listing and enrollment."""

from __future__ import annotations

import asyncio

import structlog

from skillfriend.backend.base import BackendClient
from skillfriend.backend.errors import DataFetchError, MutationError
from skillfriend.backend.models import COURSES, ENROLLMENTS, Course, Enrollment
from skillfriend.core.results import (
    AUTH_REQUIRED_TITLE,
    FetchResult,
    MutationResult,
    Notification,
)
from skillfriend.core.session import ActionInProgressError, AuthSession

logger = structlog.get_logger(__name__)

EMPTY_COURSES_MESSAGE = "No courses available at the moment. Check back soon!"
DEFAULT_COURSE_IMAGE = (
    "https://images.unsplash.com/photo-1516321318423-f06f85e504b3?w=400&h=250&fit=crop"
)


class CourseService:
    """Reads the course catalog and records enrollments."""

    def __init__(self, backend: BackendClient, payment_delay_seconds: float = 2.0):
        self.backend = backend
        self.payment_delay_seconds = payment_delay_seconds

    async def fetch_courses(self) -> FetchResult[list[Course]]:
        """List courses, oldest first. Failure yields an empty list."""
        try:
            rows = await self.backend.select(COURSES, order_by="created_at", ascending=True)
        except DataFetchError as e:
            logger.error("courses_fetch_failed", error=e.message)
            return FetchResult(
                data=[],
                notification=Notification.error(
                    "Error", "Failed to load courses. Please try again."
                ),
            )
        courses = [Course.from_row(r) for r in rows]
        logger.info("courses_fetched", count=len(courses))
        return FetchResult(data=courses)

    async def enroll(self, session: AuthSession, course_id: str) -> MutationResult:
        """Enroll the signed-in user in a course.

        Payment is simulated by a fixed delay; there is no retry and nothing
        is rolled back on failure. If the user signs out (or another user
        signs in) during the delay, nothing is written.
        """
        if not session.is_authenticated:
            return _sign_in_required()
        user_id = session.user.id

        try:
            with session.track(f"enroll:{course_id}"):
                if self.payment_delay_seconds > 0:
                    await asyncio.sleep(self.payment_delay_seconds)
                if not session.is_authenticated or session.user.id != user_id:
                    logger.info("enrollment_abandoned", user_id=user_id, course_id=course_id)
                    return _sign_in_required()
                enrollment = Enrollment(user_id=user_id, course_id=course_id)
                row = await self.backend.insert(ENROLLMENTS, enrollment.to_row())
        except ActionInProgressError:
            return MutationResult.failure(
                "Enrollment In Progress", "This enrollment is already being processed."
            )
        except MutationError as e:
            logger.error(
                "enrollment_failed",
                user_id=user_id,
                course_id=course_id,
                error=e.message,
            )
            return MutationResult.failure(
                "Enrollment Failed",
                "There was an error enrolling in the course. Please try again.",
            )

        logger.info("enrolled", user_id=user_id, course_id=course_id)
        return MutationResult.success(
            "Enrollment Successful!",
            "You have successfully enrolled in the course.",
            enrollment=row,
        )


def _sign_in_required() -> MutationResult:
    return MutationResult.failure(AUTH_REQUIRED_TITLE, "Please sign in to enroll in courses.")
