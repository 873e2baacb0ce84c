"""
StudySphere Backend: Lesson Service
=====================================

What:  Catalog operations: list, get, create, update, delete and search.
How:   Each method runs one query against the `lessons` table and maps the
       result to LessonResponse. Missing rows become NotFoundError; driver
       failures become DatabaseError with the details kept out of the
       client response.
Who:   Called by the lessons and search routes.

The service is stateless: the session is passed into every call.
"""

import logging
import math
from typing import List, Optional

from sqlalchemy import asc, desc, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from app.models.lesson import Lesson
from app.schemas.lesson import INT32_MAX, INT32_MIN, LessonCreate, LessonResponse, LessonUpdate

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "id": Lesson.id,
    "subject": Lesson.subject,
    "location": Lesson.location,
    "price": Lesson.price,
    "spaces": Lesson.spaces,
}


def _escape_like(term: str) -> str:
    """Escapes LIKE wildcards so user input matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_number(term: str) -> Optional[float]:
    try:
        number = float(term)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class LessonService:
    """
    Business logic for the lesson catalog.

    Responsibilities:
        - list_lessons():   full catalog, sorted
        - get_lesson():     one lesson by its integer id
        - create_lesson():  insert, rejecting duplicate ids
        - update_lesson():  partial update
        - delete_lesson():  remove
        - search_lessons(): text/number match on subject, location, price, spaces
    """

    async def list_lessons(
        self,
        db: AsyncSession,
        sort_by: str = "id",
        order: str = "asc",
    ) -> List[LessonResponse]:
        """
        Return every lesson, ordered by `sort_by` then by id.

        Raises:
            ValidationError: Unknown sort field or direction
            DatabaseError: Query execution failed
        """
        column = SORTABLE_FIELDS.get(sort_by)
        if column is None:
            raise ValidationError(
                message=f"Cannot sort by '{sort_by}'. Allowed: {', '.join(SORTABLE_FIELDS)}",
                field="sort_by",
            )
        if order not in ("asc", "desc"):
            raise ValidationError(message="Order must be 'asc' or 'desc'", field="order")

        direction = asc if order == "asc" else desc
        query = select(Lesson).order_by(direction(column), asc(Lesson.id))

        try:
            result = await db.execute(query)
            lessons = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing lessons: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve lessons. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [LessonResponse.model_validate(lesson) for lesson in lessons]

    async def _fetch(self, db: AsyncSession, lesson_id: int) -> Lesson:
        # Ids outside the column range cannot be stored, so they cannot exist
        if not INT32_MIN <= lesson_id <= INT32_MAX:
            raise NotFoundError(resource="lesson", resource_id=str(lesson_id))

        try:
            result = await db.execute(select(Lesson).where(Lesson.id == lesson_id))
            lesson = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching lesson %s: %s", lesson_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the lesson. Please try again.",
                context={"lesson_id": lesson_id},
            )

        if lesson is None:
            raise NotFoundError(resource="lesson", resource_id=str(lesson_id))
        return lesson

    async def get_lesson(self, db: AsyncSession, lesson_id: int) -> LessonResponse:
        """
        Retrieve a single lesson by its public id.

        Raises:
            NotFoundError: No lesson with that id (→ 404 "Lesson not found")
            DatabaseError: Query execution failed
        """
        lesson = await self._fetch(db, lesson_id)
        return LessonResponse.model_validate(lesson)

    async def create_lesson(self, db: AsyncSession, payload: LessonCreate) -> LessonResponse:
        """
        Insert a new lesson.

        Raises:
            ConflictError: A lesson with the same id already exists
            DatabaseError: Insert failed
        """
        existing = await db.get(Lesson, payload.id)
        if existing is not None:
            raise ConflictError(resource="lesson", resource_id=str(payload.id))

        lesson = Lesson(**payload.model_dump())
        try:
            db.add(lesson)
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same id
            await db.rollback()
            raise ConflictError(resource="lesson", resource_id=str(payload.id))
        except SQLAlchemyError as e:
            logger.error("Database error creating lesson %s: %s", payload.id, str(e))
            raise DatabaseError(
                message="Could not create the lesson. Please try again.",
                context={"lesson_id": payload.id, "error_type": type(e).__name__},
            )

        logger.info("Lesson created: %s (%s, %s)", lesson.id, lesson.subject, lesson.location)
        return LessonResponse.model_validate(lesson)

    async def update_lesson(
        self,
        db: AsyncSession,
        lesson_id: int,
        payload: LessonUpdate,
    ) -> LessonResponse:
        """
        Apply a partial update and return the lesson as stored.

        Only fields present in the request body are written; an explicit
        null for a field is treated as absent.

        Raises:
            ValidationError: The body contains no fields
            NotFoundError: No lesson with that id
            DatabaseError: Update failed
        """
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValidationError(message="No fields to update")

        lesson = await self._fetch(db, lesson_id)
        for field, value in changes.items():
            setattr(lesson, field, value)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating lesson %s: %s", lesson_id, str(e))
            raise DatabaseError(
                message="Could not update the lesson. Please try again.",
                context={"lesson_id": lesson_id, "error_type": type(e).__name__},
            )

        logger.info("Lesson %s updated: %s", lesson_id, ", ".join(sorted(changes)))
        return LessonResponse.model_validate(lesson)

    async def delete_lesson(self, db: AsyncSession, lesson_id: int) -> None:
        """
        Remove a lesson. Orders that reference it are left as they are.

        Raises:
            NotFoundError: No lesson with that id
            DatabaseError: Delete failed
        """
        lesson = await self._fetch(db, lesson_id)
        try:
            await db.delete(lesson)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting lesson %s: %s", lesson_id, str(e))
            raise DatabaseError(
                message="Could not delete the lesson. Please try again.",
                context={"lesson_id": lesson_id, "error_type": type(e).__name__},
            )
        logger.info("Lesson %s deleted", lesson_id)

    async def search_lessons(self, db: AsyncSession, q: Optional[str] = None) -> List[LessonResponse]:
        """
        Search the catalog.

        Matching rules:
            - subject or location contains the term, ignoring case
            - if the term is a number: price equals it
            - if the term is a whole number: spaces equals it
            - blank or missing term: every lesson

        Results are ordered by id.
        """
        term = (q or "").strip()
        query = select(Lesson)

        if term:
            pattern = f"%{_escape_like(term)}%"
            conditions = [
                Lesson.subject.ilike(pattern, escape="\\"),
                Lesson.location.ilike(pattern, escape="\\"),
            ]
            number = _parse_number(term)
            if number is not None:
                conditions.append(Lesson.price == number)
                if number.is_integer() and INT32_MIN <= number <= INT32_MAX:
                    conditions.append(Lesson.spaces == int(number))
            query = query.where(or_(*conditions))

        query = query.order_by(asc(Lesson.id))

        try:
            result = await db.execute(query)
            lessons = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error searching lessons for %r: %s", term, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not search lessons. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.debug("Search %r matched %d lessons", term, len(lessons))
        return [LessonResponse.model_validate(lesson) for lesson in lessons]


lesson_service = LessonService()
