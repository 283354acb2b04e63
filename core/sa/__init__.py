# core/sa/__init__.py
from .database import Database
from .models import (
    Base, Product, ProductType, LibraryEntry, EntrySource,
    Purchase, UserProgress, User
)

__all__ = [
    'Database',
    'Base',
    'Product',
    'ProductType',
    'LibraryEntry',
    'EntrySource',
    'Purchase',
    'UserProgress',
    'User',
]
