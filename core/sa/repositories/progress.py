# core/sa/repositories/progress.py
from datetime import datetime, UTC
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.sa.models import UserProgress


class ProgressRepository:
    """Reading/listening checkpoints per (user, product)."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: str, product_id: str) -> Optional[UserProgress]:
        return (
            self.session.query(UserProgress)
            .filter(UserProgress.user_id == user_id, UserProgress.product_id == product_id)
            .one_or_none()
        )

    def save(self, user_id: str, product_id: str, progress: float, total: float) -> UserProgress:
        """Create or overwrite the checkpoint for a user and product.

        Args:
            user_id: The user identifier
            product_id: The product identifier
            progress: Units consumed so far (seconds, pages, ...)
            total: Total units in the product

        Returns:
            The stored UserProgress row
        """
        record = self.get(user_id, product_id)
        if record is None:
            record = UserProgress(user_id=user_id, product_id=product_id)
            self.session.add(record)

        record.progress = progress
        record.total = total
        record.last_updated = datetime.now(UTC)
        try:
            self.session.commit()
        except IntegrityError:
            # Another request inserted the row first; update that one instead.
            self.session.rollback()
            record = self.get(user_id, product_id)
            record.progress = progress
            record.total = total
            record.last_updated = datetime.now(UTC)
            self.session.commit()
        return record
