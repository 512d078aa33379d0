"""
Request payload models

Bodies arrive camelCase (cartId, productId, customerEmail); the models expose
snake_case attributes to the stores.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from storefront.models.order import OrderStatus


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class CartItemCreate(RequestModel):
    """Request model for add-to-cart"""
    cart_id: str = Field(min_length=1, max_length=100)
    product_id: int = Field(strict=True, gt=0)
    quantity: int = Field(default=1, strict=True, gt=0)


class QuantityUpdate(RequestModel):
    quantity: int = Field(strict=True, gt=0)


class CustomerDetails(RequestModel):
    customer_name: str = Field(min_length=1, max_length=200)
    customer_email: EmailStr
    customer_phone: str = Field(min_length=1, max_length=50)


class OrderDraft(CustomerDetails):
    """Order header as sent by the checkout page"""
    total_amount: Optional[Decimal] = Field(default=None, ge=0)
    status: Optional[OrderStatus] = None


class OrderItemDraft(RequestModel):
    product_id: int = Field(strict=True, gt=0)
    quantity: int = Field(strict=True, gt=0)
    price: Decimal = Field(ge=0)


class OrderCreate(RequestModel):
    """Request model for POST /orders: {order, items}"""
    order: OrderDraft
    items: List[OrderItemDraft]


class StatusUpdate(RequestModel):
    status: OrderStatus
