"""
StudySphere Backend: Order Service
====================================

What:  Places orders and reads them back.
Who:   Called by the orders routes.

Order Placement Flow (POST /api/orders):
    ┌──────────────┐    ┌──────────────┐    ┌───────────────────────────┐
    │  Validated   │───▶│ INSERT order │───▶│ UPDATE lessons            │
    │  OrderCreate │    │ + COMMIT     │    │ SET spaces = spaces - n   │
    └──────────────┘    └──────────────┘    │ + COMMIT (per line item)  │
                                            └───────────────────────────┘

    The two steps are independent writes. Once the order is committed it
    stays, whatever happens to the inventory updates after it. There is no
    availability check, no floor at zero, and no idempotency key: posting
    the same body twice places two orders.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import DatabaseError, NotFoundError
from app.models.lesson import Lesson
from app.models.order import Order
from app.schemas.order import OrderCreate, OrderListResponse, OrderResponse

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
        - place_order(): insert the order, then decrement lesson spaces
        - list_orders(): newest first, bounded page
        - get_order():   one order by UUID
    """

    async def place_order(self, db: AsyncSession, payload: OrderCreate) -> OrderResponse:
        """
        Store an order and take the booked spaces off each lesson.

        Steps:
            1. Insert the order row and commit it.
            2. For each line item, decrement the lesson's spaces and commit.
               Line items naming a lesson that does not exist are logged
               and skipped.

        Raises:
            DatabaseError: Either step failed. If step 2 fails the order
                           from step 1 is already stored.
        """
        order_id = uuid.uuid4()
        order = Order(
            id=order_id,
            name=payload.name,
            phone=payload.phone,
            lessons=[item.model_dump() for item in payload.lessons],
            created_at=datetime.now(timezone.utc),
        )

        # ── Step 1: Insert the order ──────────────────────────────────────
        try:
            db.add(order)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error inserting order: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not place the order. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Order %s inserted: %d line items", order_id, len(payload.lessons))

        # ── Step 2: Decrement lesson spaces ───────────────────────────────
        for item in payload.lessons:
            try:
                result = await db.execute(
                    update(Lesson)
                    .where(Lesson.id == item.lesson_id)
                    .values(spaces=Lesson.spaces - item.spaces)
                )
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                logger.error(
                    "Order %s stored but spaces update failed for lesson %s: %s",
                    order_id,
                    item.lesson_id,
                    str(e),
                )
                raise DatabaseError(
                    message="The order was saved but lesson availability could not be updated.",
                    context={"order_id": str(order_id), "lesson_id": item.lesson_id},
                )

            if result.rowcount == 0:
                logger.warning(
                    "Order %s references unknown lesson %s; spaces not updated",
                    order_id,
                    item.lesson_id,
                )
            else:
                logger.info(
                    "Lesson %s spaces decremented by %d (order %s)",
                    item.lesson_id,
                    item.spaces,
                    order_id,
                )

        return OrderResponse.model_validate(order)

    async def list_orders(self, db: AsyncSession, limit: Optional[int] = None) -> OrderListResponse:
        """
        List orders, newest first.

        Args:
            limit: Page size (defaults to settings.orders_page_size)
        """
        limit = limit or settings.orders_page_size
        try:
            result = await db.execute(
                select(Order).order_by(desc(Order.created_at)).limit(limit)
            )
            orders = result.scalars().all()

            count_result = await db.execute(select(func.count(Order.id)))
            total_count = count_result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error listing orders: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve orders. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return OrderListResponse(
            orders=[OrderResponse.model_validate(order) for order in orders],
            total_count=total_count,
        )

    async def get_order(self, db: AsyncSession, order_id: UUID) -> OrderResponse:
        """
        Retrieve one order.

        Raises:
            NotFoundError: No order with that id (→ 404 "Order not found")
            DatabaseError: Query execution failed
        """
        try:
            order = await db.get(Order, order_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching order %s: %s", order_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the order. Please try again.",
                context={"order_id": str(order_id)},
            )

        if order is None:
            raise NotFoundError(resource="order", resource_id=str(order_id))
        return OrderResponse.model_validate(order)


order_service = OrderService()
