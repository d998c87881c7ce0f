"""Course endpoints."""

from fastapi import APIRouter, Depends

from skillfriend.core.courses import CourseService
from skillfriend.web.dependencies import get_client, get_course_service, get_optional_client
from skillfriend.web.schemas import CourseListResponse, MutationResponse
from skillfriend.web.sessions import ClientSession
from skillfriend.web.views import course_list, mutation_response

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get("", response_model=CourseListResponse)
async def list_courses(
    service: CourseService = Depends(get_course_service),
    client: ClientSession | None = Depends(get_optional_client),
) -> CourseListResponse:
    """List all courses, oldest first."""
    return course_list(await service.fetch_courses(), client)


@router.post("/{course_id}/enroll", response_model=MutationResponse)
async def enroll(
    course_id: str,
    client: ClientSession = Depends(get_client),
    service: CourseService = Depends(get_course_service),
) -> MutationResponse:
    """Enroll the signed-in user in a course."""
    return mutation_response(await service.enroll(client.auth, course_id))
