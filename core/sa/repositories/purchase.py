# core/sa/repositories/purchase.py
from typing import List
from sqlalchemy.orm import Session, joinedload

from core.sa.models import Purchase


class PurchaseRepository:
    """Read-only access to historical purchases."""

    def __init__(self, session: Session):
        self.session = session

    def get_for_user(self, user_id: str) -> List[Purchase]:
        """Get a user's purchases with their products loaded, in recorded order."""
        return (
            self.session.query(Purchase)
            .options(joinedload(Purchase.product))
            .filter(Purchase.user_id == user_id)
            .order_by(Purchase.id)
            .all()
        )

    def has_purchased(self, user_id: str, product_id: str) -> bool:
        return (
            self.session.query(Purchase.id)
            .filter(Purchase.user_id == user_id, Purchase.product_id == product_id)
            .first()
        ) is not None
