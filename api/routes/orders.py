# api/routes/orders.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.schemas.library import LibraryItemSchema
from api.schemas.orders import FulfillmentResponse, PaymentVerification
from core.config import Settings, get_settings
from core.sa.database import get_db
from core.services.fulfillment import FulfillmentService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/verify", response_model=FulfillmentResponse, status_code=status.HTTP_201_CREATED)
def verify_payment(
    payment: PaymentVerification,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Verify a gateway payment signature and fulfill the order's digital items.

    The signature is the caller's credential; no bearer token is needed.
    Returns 400 for a bad signature.
    """
    service = FulfillmentService(db, settings.payment_key_secret)
    added = service.fulfill(
        order_id=payment.order_id,
        payment_id=payment.payment_id,
        signature=payment.signature,
        customer_email=payment.customer.email,
        product_ids=[item.product_id for item in payment.items],
    )
    return FulfillmentResponse(
        success=True,
        message="Payment verified and order placed",
        fulfilled=[LibraryItemSchema.from_item(item) for item in added],
    )
