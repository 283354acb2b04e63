# core/sa/models/__init__.py
from .base import Base, TimestampMixin, UTCDateTime
from .product import Product, ProductType, DIGITAL_TYPES
from .library import LibraryEntry, EntrySource
from .purchase import Purchase
from .progress import UserProgress
from .user import User

__all__ = [
    'Base',
    'TimestampMixin',
    'UTCDateTime',
    'Product',
    'ProductType',
    'DIGITAL_TYPES',
    'LibraryEntry',
    'EntrySource',
    'Purchase',
    'UserProgress',
    'User',
]
