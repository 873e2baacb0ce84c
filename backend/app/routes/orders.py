"""
StudySphere Backend: Order Route Handlers
===========================================

What:  POST /api/orders (checkout), GET /api/orders, GET /api/orders/{id}.
Who:   The storefront checkout form; order history for staff.

Request Flow (checkout):
    1. FastAPI validates the body against OrderCreate (422 on bad
       name/phone/empty basket)
    2. OrderService inserts the order, then decrements lesson spaces
    3. 201 Created with the stored order
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.order import OrderCreate, OrderListResponse, OrderResponse
from app.services.order_service import order_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Orders"])


@router.post(
    "/orders",
    status_code=201,
    response_model=OrderResponse,
    responses={
        201: {"description": "Order placed", "model": OrderResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Place an order",
    description=(
        "Stores the order, then takes the booked spaces off each lesson. "
        "The two writes are independent: if the second fails, the order "
        "remains stored and a 500 is returned."
    ),
)
async def place_order(
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    logger.info(
        "Received order: %d line items, %d spaces",
        len(payload.lessons),
        sum(item.spaces for item in payload.lessons),
    )
    return await order_service.place_order(db=db, payload=payload)


@router.get(
    "/orders",
    response_model=OrderListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List recent orders",
)
async def list_orders(
    limit: int | None = Query(default=None, ge=1, le=100, description="Maximum orders returned"),
    db: AsyncSession = Depends(get_db_session),
) -> OrderListResponse:
    return await order_service.list_orders(db=db, limit=limit)


@router.get(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={
        404: {"description": "Order not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get an order by ID",
)
async def get_order(
    order_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    return await order_service.get_order(db=db, order_id=order_id)
