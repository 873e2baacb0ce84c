"""ORM models. Importing this package registers every table with Base.metadata."""

from app.models.lesson import Lesson
from app.models.order import Order

__all__ = ["Lesson", "Order"]
