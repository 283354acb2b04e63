# core/sa/models/product.py
import uuid
from enum import Enum
from typing import Optional
from sqlalchemy import String, Integer, Float, Index
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, TimestampMixin


class ProductType(str, Enum):
    EBOOK = "EBOOK"
    AUDIOBOOK = "AUDIOBOOK"
    HARDCOVER = "HARDCOVER"
    PAPERBACK = "PAPERBACK"

    @property
    def is_digital(self) -> bool:
        return self in (ProductType.EBOOK, ProductType.AUDIOBOOK)

    @property
    def label(self) -> str:
        """Display label used in library views ("E-Book" or "Audiobook")."""
        return "Audiobook" if self is ProductType.AUDIOBOOK else "E-Book"

    @classmethod
    def from_label(cls, value: Optional[str]) -> Optional["ProductType"]:
        """Map a stored type or display label ("E-Book", "ebook", "AUDIOBOOK") to a member."""
        if not value:
            return None
        normalized = value.strip().upper().replace("E-BOOK", "EBOOK")
        try:
            return cls(normalized)
        except ValueError:
            return None


DIGITAL_TYPES = (ProductType.EBOOK.value, ProductType.AUDIOBOOK.value)


def generate_product_id() -> str:
    return uuid.uuid4().hex


class Product(Base, TimestampMixin):
    __tablename__ = 'product'

    # Identifiers are opaque strings: legacy catalogs use readable ids like 'efv_v1_ebook'
    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=generate_product_id)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    file_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    discount: Mapped[float | None] = mapped_column(Float, nullable=True)
    stock: Mapped[int | None] = mapped_column(Integer, nullable=True)
    language: Mapped[str | None] = mapped_column(String(50), nullable=True)
    volume: Mapped[str | None] = mapped_column(String(50), nullable=True)

    __table_args__ = (
        Index('idx_product_type', 'type'),
        Index('idx_product_title', 'title'),
    )

    @property
    def product_type(self) -> Optional[ProductType]:
        return ProductType.from_label(self.type)

    @property
    def is_digital(self) -> bool:
        product_type = self.product_type
        return product_type is not None and product_type.is_digital
