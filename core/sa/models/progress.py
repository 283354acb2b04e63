# core/sa/models/progress.py
from datetime import datetime, UTC
from sqlalchemy import Integer, String, Float, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, UTCDateTime


class UserProgress(Base):
    __tablename__ = 'user_progress'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    product_id: Mapped[str] = mapped_column(String(255), nullable=False)
    progress: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    total: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=lambda: datetime.now(UTC))

    __table_args__ = (
        UniqueConstraint('user_id', 'product_id', name='uix_user_progress_user_product'),
    )
