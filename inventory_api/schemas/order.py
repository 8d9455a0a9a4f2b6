# schemas/order.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List
from decimal import Decimal

from inventory_api.schemas.product import ProductResponse

class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(..., gt=0)

class OrderCreate(BaseModel):
    # Users may omit it to order against their own profile
    customer_id: int | None = None
    items: List[OrderItemCreate] = Field(default_factory=list)

class OrderUpdate(BaseModel):
    customer_id: int | None = None
    order_date: datetime | None = None
    total_amount: Decimal | None = Field(None, ge=0)

class OrderItemResponse(BaseModel):
    id: int
    order_id: int
    product_id: int | None
    quantity: int
    price: float

    model_config = ConfigDict(from_attributes=True)

class OrderItemDetailResponse(OrderItemResponse):
    product: ProductResponse | None = None

class OrderResponse(BaseModel):
    id: int
    # Users may omit it to order against their own profile
    customer_id: int | None = None
    order_date: datetime
    total_amount: float

    model_config = ConfigDict(from_attributes=True)

class OrderDetailResponse(OrderResponse):
    items: List[OrderItemDetailResponse]
