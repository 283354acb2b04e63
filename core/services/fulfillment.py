# core/services/fulfillment.py
import hashlib
import hmac
import logging
from datetime import datetime, UTC
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from core.errors import InvalidSignatureError
from core.models.library import LibraryItem
from core.sa.repositories import LibraryRepository, ProductRepository, UserRepository

logger = logging.getLogger(__name__)


def verify_payment_signature(order_id: Optional[str], payment_id: Optional[str], signature: Optional[str], secret: str) -> bool:
    """Check a gateway signature: hex HMAC-SHA256 of ``"<order_id>|<payment_id>"``."""
    if not (order_id and payment_id and signature and secret):
        return False
    expected = hmac.new(
        secret.encode('utf-8'),
        f"{order_id}|{payment_id}".encode('utf-8'),
        hashlib.sha256,
    ).hexdigest()
    return hmac.compare_digest(expected, signature)


class FulfillmentService:
    """Grants library access for the digital items of a paid order."""

    def __init__(self, session: Session, payment_secret: str):
        self.session = session
        self.payment_secret = payment_secret
        self.products = ProductRepository(session)
        self.library = LibraryRepository(session)
        self.users = UserRepository(session)

    def fulfill(
        self,
        order_id: str,
        payment_id: str,
        signature: str,
        customer_email: str,
        product_ids: Iterable[str],
    ) -> List[LibraryItem]:
        """Verify the payment, then add the order's digital products to the buyer's library.

        Physical products, unknown ids and products already owned are
        skipped. Guests (no account for the email) get nothing added.

        Returns:
            The items that were added

        Raises:
            InvalidSignatureError: the signature does not match
        """
        if not verify_payment_signature(order_id, payment_id, signature, self.payment_secret):
            logger.warning(f"Rejected payment {payment_id} for order {order_id}: bad signature")
            raise InvalidSignatureError()

        user = self.users.get_by_email(customer_email)
        if user is None:
            logger.info(f"Order {order_id} paid by guest {customer_email}; no library to fulfill")
            return []

        owned = self.library.get_owned_product_ids(user.id)
        added: List[LibraryItem] = []
        now = datetime.now(UTC)
        for product_id in product_ids:
            product = self.products.get_by_id(product_id)
            if product is None or not product.is_digital or product.id in owned:
                continue
            item = LibraryItem.from_product(product, purchased_at=now)
            self.library.add_item(user.id, item, commit=False)
            owned.add(product.id)
            added.append(item)

        if added:
            self.session.commit()
            logger.info(f"Digital items added to library for user {user.email}: {len(added)}")
        return added
