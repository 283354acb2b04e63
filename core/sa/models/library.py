# core/sa/models/library.py
from datetime import datetime
from enum import Enum
from sqlalchemy import Integer, String, Float, Index
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, TimestampMixin, UTCDateTime


class EntrySource(str, Enum):
    PRIMARY = "primary"                  # Added to the library directly or via fulfillment
    LEGACY_MIGRATED = "legacy_migrated"  # Derived from historical purchases
    DEMO_FALLBACK = "demo_fallback"      # Read from the demo users file, never persisted


class LibraryEntry(Base, TimestampMixin):
    """A user's ownership of one digital product.

    Display fields are a snapshot taken when the entry was written; the
    reconciler refreshes them from the catalog on every read. There is no
    unique constraint on (user_id, product_id) because legacy rows may
    reference the same product under different identifiers.
    """
    __tablename__ = 'library_entry'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    product_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    type_label: Mapped[str | None] = mapped_column(String(20), nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    file_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    purchased_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    progress: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    source: Mapped[str] = mapped_column(String(20), nullable=False, default=EntrySource.PRIMARY.value)

    __table_args__ = (
        Index('idx_library_entry_user_id', 'user_id'),
        Index('idx_library_entry_user_product', 'user_id', 'product_id'),
    )
