# api/schemas/orders.py
from typing import List, Optional

from pydantic import Field

from api.schemas.library import CamelModel, LibraryItemSchema


class Customer(CamelModel):
    email: str
    name: Optional[str] = None


class OrderItem(CamelModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class PaymentVerification(CamelModel):
    order_id: str
    payment_id: str
    signature: str
    customer: Customer
    items: List[OrderItem] = []


class FulfillmentResponse(CamelModel):
    success: bool
    message: str
    fulfilled: List[LibraryItemSchema]
