"""
StudySphere Backend: Order Service Tests
==========================================

What:  OrderService against an in-memory SQLite database.

What we test:
    ✅ Placing an order stores it and decrements every booked lesson
    ✅ Unknown lessons are skipped, the order is still stored
    ✅ Spaces are not floored at zero
    ✅ A failing inventory update leaves the committed order in place
    ✅ Listing newest first with a limit, fetching by id
    ✅ Checkout validation rules on OrderCreate
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Update, select
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError
from app.models.lesson import Lesson
from app.models.order import Order
from app.schemas.order import OrderCreate
from app.services.order_service import OrderService


def make_order(*items, name="Ada Lovelace", phone="07123456789"):
    return OrderCreate(
        name=name,
        phone=phone,
        lessons=[{"lesson_id": lesson_id, "spaces": spaces} for lesson_id, spaces in items],
    )


async def spaces_of(db_session, lesson_id):
    result = await db_session.execute(select(Lesson.spaces).where(Lesson.id == lesson_id))
    return result.scalar_one()


class TestPlaceOrder:

    def setup_method(self):
        self.service = OrderService()

    @pytest.mark.asyncio
    async def test_place_order_decrements_spaces(self, db_session, seeded_lessons):
        result = await self.service.place_order(db_session, make_order((1, 2), (3, 1)))

        assert result.name == "Ada Lovelace"
        assert result.total_spaces == 3
        assert [item.lesson_id for item in result.lessons] == [1, 3]
        assert await spaces_of(db_session, 1) == 3
        assert await spaces_of(db_session, 3) == 2
        # Untouched lesson keeps its spaces
        assert await spaces_of(db_session, 2) == 5

    @pytest.mark.asyncio
    async def test_place_order_is_persisted(self, db_session, seeded_lessons):
        result = await self.service.place_order(db_session, make_order((2, 1)))

        stored = await db_session.get(Order, result.id)
        assert stored is not None
        assert stored.lessons == [{"lesson_id": 2, "spaces": 1}]

    @pytest.mark.asyncio
    async def test_same_lesson_twice_is_decremented_twice(self, db_session, seeded_lessons):
        await self.service.place_order(db_session, make_order((1, 1), (1, 2)))
        assert await spaces_of(db_session, 1) == 2

    @pytest.mark.asyncio
    async def test_unknown_lesson_is_skipped(self, db_session, seeded_lessons):
        result = await self.service.place_order(db_session, make_order((99, 1), (2, 1)))

        assert result.total_spaces == 2
        assert await spaces_of(db_session, 2) == 4
        assert await db_session.get(Order, result.id) is not None

    @pytest.mark.asyncio
    async def test_spaces_can_go_negative(self, db_session, seeded_lessons):
        """No availability check: lesson 4 has 0 spaces and still takes the booking."""
        await self.service.place_order(db_session, make_order((4, 2)))
        assert await spaces_of(db_session, 4) == -2

    @pytest.mark.asyncio
    async def test_inventory_failure_keeps_order(self, db_session, seeded_lessons):
        """The order insert is committed before the spaces update runs."""
        real_execute = db_session.execute
        failure = OperationalError("UPDATE", {}, Exception("connection lost"))

        async def failing_update(statement, *args, **kwargs):
            if isinstance(statement, Update):
                raise failure
            return await real_execute(statement, *args, **kwargs)

        with patch.object(db_session, "execute", side_effect=failing_update):
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.place_order(db_session, make_order((1, 1)))

        order_id = exc_info.value.context["order_id"]
        result = await db_session.execute(select(Order))
        orders = result.scalars().all()
        assert [str(order.id) for order in orders] == [order_id]
        assert await spaces_of(db_session, 1) == 5

    @pytest.mark.asyncio
    async def test_insert_failure_raises_database_error(self, db_session):
        db_session.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down")))
        with pytest.raises(DatabaseError, match="Could not place the order"):
            await self.service.place_order(db_session, make_order((1, 1)))


class TestReadOrders:

    def setup_method(self):
        self.service = OrderService()

    @pytest.mark.asyncio
    async def test_list_orders_newest_first(self, db_session):
        now = datetime.now(timezone.utc)
        for i, name in enumerate(["First", "Second", "Third"]):
            db_session.add(Order(
                id=uuid4(),
                name=name,
                phone="0712345678",
                lessons=[{"lesson_id": 1, "spaces": 1}],
                created_at=now + timedelta(minutes=i),
            ))
        await db_session.commit()

        result = await self.service.list_orders(db_session, limit=2)

        assert result.total_count == 3
        assert [order.name for order in result.orders] == ["Third", "Second"]

    @pytest.mark.asyncio
    async def test_list_orders_empty(self, db_session):
        result = await self.service.list_orders(db_session)
        assert result.orders == []
        assert result.total_count == 0

    @pytest.mark.asyncio
    async def test_get_order(self, db_session, seeded_lessons):
        placed = await self.service.place_order(db_session, make_order((3, 2)))
        fetched = await self.service.get_order(db_session, placed.id)
        assert fetched.id == placed.id
        assert fetched.total_spaces == 2

    @pytest.mark.asyncio
    async def test_get_order_not_found(self, db_session):
        with pytest.raises(NotFoundError, match="Order not found"):
            await self.service.get_order(db_session, uuid4())


class TestOrderCreateValidation:

    def test_name_with_digits_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_order((1, 1), name="R2D2")

    def test_name_allows_hyphen_and_apostrophe(self):
        order = make_order((1, 1), name="  Mary-Jane O'Neil ")
        assert order.name == "Mary-Jane O'Neil"

    def test_phone_spaces_removed(self):
        order = make_order((1, 1), phone="+44 7123 456789")
        assert order.phone == "+447123456789"

    def test_phone_with_letters_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_order((1, 1), phone="call me")

    def test_phone_too_short_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_order((1, 1), phone="12345")

    def test_empty_basket_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_order()

    def test_zero_spaces_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_order((1, 0))

    def test_lesson_id_beyond_column_range_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_order((2**31, 1))
