"""FastAPI routes for orders and product stock.

Route functions are plain ``def`` so FastAPI runs them on its worker
thread pool; each request is handled independently and only contends
through the Stock Ledger and the per-order locks.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from agrimarket.application.dto import CheckoutItemSpec
from agrimarket.application.render_receipt import receipt_number
from agrimarket.domain.model.user import User
from agrimarket.infrastructure.bootstrap import Container
from agrimarket.infrastructure.http.schemas import (
    PlaceOrderRequest,
    UpdateStatusRequest,
    UpdateStockRequest,
)


def get_container(request: Request) -> Container:
    return request.app.state.container


def current_user(
    x_user_id: str | None = Header(default=None),
    app: Container = Depends(get_container),
) -> User:
    return app.authenticate(x_user_id)


def success(data: object, status_code: int = 200, message: str | None = None) -> JSONResponse:
    body: dict = {"success": True}
    if message:
        body["message"] = message
    body["data"] = data
    return JSONResponse(status_code=status_code, content=body)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201)
def place_order(
    body: PlaceOrderRequest,
    user: User = Depends(current_user),
    app: Container = Depends(get_container),
) -> JSONResponse:
    dto = app.place_order().handle(
        buyer=user,
        item_specs=[CheckoutItemSpec(i.product_id, i.quantity) for i in body.items],
        shipping_address=body.shipping_address.model_dump() if body.shipping_address else None,
        payment_method=body.payment_method,
        notes=body.notes,
    )
    return success({"order": asdict(dto)}, 201, "Order placed successfully")


@order_router.get("/my-orders")
def my_orders(
    user: User = Depends(current_user),
    app: Container = Depends(get_container),
) -> JSONResponse:
    orders = app.list_buyer_orders().handle(user)
    return success({"orders": [asdict(o) for o in orders]})


@order_router.get("/farmer-orders")
def farmer_orders(
    user: User = Depends(current_user),
    app: Container = Depends(get_container),
) -> JSONResponse:
    orders = app.list_farmer_orders().handle(user)
    return success({"orders": [asdict(o) for o in orders]})


@order_router.get("/{order_id}")
def get_order(
    order_id: int,
    user: User = Depends(current_user),
    app: Container = Depends(get_container),
) -> JSONResponse:
    dto = app.show_order().handle(order_id, user)
    return success({"order": asdict(dto)})


@order_router.patch("/{order_id}/status")
def update_order_status(
    order_id: int,
    body: UpdateStatusRequest,
    user: User = Depends(current_user),
    app: Container = Depends(get_container),
) -> JSONResponse:
    dto = app.update_order_status().handle(order_id, user, body.status)
    return success({"order": asdict(dto)}, 200, "Order status updated")


@order_router.get("/{order_id}/receipt")
def download_receipt(
    order_id: int,
    user: User = Depends(current_user),
    app: Container = Depends(get_container),
) -> PlainTextResponse:
    text = app.render_receipt().handle(order_id, user)
    filename = f"AgriMarket_Receipt_{receipt_number(order_id)}.txt"
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.patch("/{product_id}/stock")
def update_stock(
    product_id: str,
    body: UpdateStockRequest,
    user: User = Depends(current_user),
    app: Container = Depends(get_container),
) -> JSONResponse:
    dto = app.set_stock().handle(
        product_id,
        user,
        local_stock=body.local_stock,
        industrial_stock=body.industrial_stock,
    )
    return success(asdict(dto), 200, "Stock updated")
