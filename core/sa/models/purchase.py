# core/sa/models/purchase.py
from datetime import datetime
from sqlalchemy import Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, UTCDateTime


class Purchase(Base):
    """Historical purchase record. The core only ever reads these."""
    __tablename__ = 'purchase'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    product_id: Mapped[str] = mapped_column(String(255), ForeignKey('product.id'), nullable=False)
    purchased_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    # Relationships
    product = relationship('Product')

    __table_args__ = (
        Index('idx_purchase_user_id', 'user_id'),
    )
