"""
StudySphere Backend: Lesson Route Handlers
============================================

What:  CRUD endpoints for the lesson catalog under /api/lessons.
How:   Extracts path/query/body, delegates to LessonService, returns JSON.
Who:   Called by the storefront (catalog page, lesson detail) and admin tools.

Lesson ids are integers in the URL. A non-numeric id is rejected by
FastAPI with 422 before the handler runs.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.lesson import (
    LessonCreate,
    LessonResponse,
    LessonSortField,
    LessonUpdate,
    SortOrder,
)
from app.services.lesson_service import lesson_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Lessons"])


@router.get(
    "/lessons",
    response_model=list[LessonResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all lessons",
)
async def list_lessons(
    response: Response,
    sort_by: LessonSortField = Query(default="id", description="Field to sort by"),
    order: SortOrder = Query(default="asc", description="Sort direction"),
    db: AsyncSession = Depends(get_db_session),
) -> list[LessonResponse]:
    """
    Return the full catalog.

    The catalog is small and the storefront renders it in one go, so there
    is no pagination. X-Total-Count carries the number of lessons.
    """
    lessons = await lesson_service.list_lessons(db=db, sort_by=sort_by, order=order)
    response.headers["X-Total-Count"] = str(len(lessons))
    return lessons


@router.get(
    "/lessons/{lesson_id}",
    response_model=LessonResponse,
    responses={
        404: {"description": "Lesson not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a lesson by ID",
)
async def get_lesson(
    lesson_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> LessonResponse:
    return await lesson_service.get_lesson(db=db, lesson_id=lesson_id)


@router.post(
    "/lessons",
    status_code=201,
    response_model=LessonResponse,
    responses={
        409: {"description": "Lesson ID already taken", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a lesson",
)
async def create_lesson(
    payload: LessonCreate,
    db: AsyncSession = Depends(get_db_session),
) -> LessonResponse:
    return await lesson_service.create_lesson(db=db, payload=payload)


@router.put(
    "/lessons/{lesson_id}",
    response_model=LessonResponse,
    responses={
        400: {"description": "Empty update", "model": ErrorResponse},
        404: {"description": "Lesson not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update lesson fields",
    description=(
        "Partially updates a lesson. Only the fields present in the body are "
        "changed; the response is the lesson as stored after the update."
    ),
)
async def update_lesson(
    lesson_id: int,
    payload: LessonUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> LessonResponse:
    return await lesson_service.update_lesson(db=db, lesson_id=lesson_id, payload=payload)


@router.delete(
    "/lessons/{lesson_id}",
    status_code=204,
    responses={
        404: {"description": "Lesson not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a lesson",
)
async def delete_lesson(
    lesson_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await lesson_service.delete_lesson(db=db, lesson_id=lesson_id)
    return Response(status_code=204)
