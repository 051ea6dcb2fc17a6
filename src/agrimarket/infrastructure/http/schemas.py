"""Pydantic request schemas for the HTTP API.

These are external contracts: field names follow the camelCase JSON the
web client sends.  Business validation stays in the domain, so most
fields here are permissive and the handlers produce the 400s.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ShippingAddressSchema(_CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    phone: str = ""


class CheckoutItemSchema(_CamelModel):
    product_id: str = Field(alias="productId")
    quantity: int


class PlaceOrderRequest(_CamelModel):
    items: list[CheckoutItemSchema] = Field(default_factory=list)
    shipping_address: ShippingAddressSchema | None = Field(default=None, alias="shippingAddress")
    payment_method: str | None = Field(default=None, alias="paymentMethod")
    notes: str | None = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "items": [{"productId": "1", "quantity": 3}],
                    "shippingAddress": {
                        "street": "12 Market Road",
                        "city": "Nashik",
                        "state": "Maharashtra",
                        "pincode": "422001",
                        "phone": "9876543210",
                    },
                    "paymentMethod": "cod",
                }
            ]
        },
    )


class UpdateStatusRequest(_CamelModel):
    status: str


class UpdateStockRequest(_CamelModel):
    local_stock: int | None = Field(default=None, alias="localStock")
    industrial_stock: int | None = Field(default=None, alias="industrialStock")
