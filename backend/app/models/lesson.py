"""
StudySphere Backend: Lesson SQLAlchemy Model
==============================================

What:  ORM model for the `lessons` table, the tutoring catalog.
Who:   LessonService for catalog CRUD and search; OrderService for the
       spaces decrement; Alembic for schema management.

Table Design:
    - id: The public integer identifier clients use in URLs
      (GET /api/lessons/3). Assigned by whoever creates the lesson,
      not by a sequence, so catalog ids stay stable across environments.
    - subject / location: Free text, both searched case-insensitively.
    - price: Per-lesson price as a float.
    - spaces: Remaining capacity. Orders decrement it without a floor,
      so it may go negative under concurrent checkouts.
    - image: File name relative to IMAGES_DIR (e.g. "math.png").
"""

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Lesson(Base):
    """A bookable lesson with a finite number of spaces."""

    __tablename__ = "lessons"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Public lesson identifier used in URLs",
    )

    subject: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        index=True,
        comment="Lesson subject, e.g. Math",
    )

    location: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        index=True,
        comment="Where the lesson takes place",
    )

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        comment="Price per space",
    )

    spaces: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Remaining available spaces",
    )

    image: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        comment="Image file name relative to IMAGES_DIR",
    )

    def __repr__(self) -> str:
        return f"<Lesson(id={self.id}, subject='{self.subject}', spaces={self.spaces})>"
