"""
StudySphere Backend: Search Route Handler
===========================================

What:  GET /api/search?q=<term> over the lesson catalog.
Who:   Called by the storefront search box on every keystroke.

Matching rules live in LessonService.search_lessons. An empty or missing
term returns the whole catalog so the page can reset its list.
"""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.lesson import LessonResponse
from app.services.lesson_service import lesson_service

router = APIRouter(prefix="/api", tags=["Search"])


@router.get(
    "/search",
    response_model=list[LessonResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Search lessons",
    description=(
        "Case-insensitive substring match on subject and location. Numeric "
        "terms also match price, and whole numbers match available spaces."
    ),
)
async def search_lessons(
    response: Response,
    q: str | None = Query(default=None, max_length=100, description="Search term"),
    db: AsyncSession = Depends(get_db_session),
) -> list[LessonResponse]:
    lessons = await lesson_service.search_lessons(db=db, q=q)
    response.headers["X-Total-Count"] = str(len(lessons))
    return lessons
