# core/sa/repositories/__init__.py
from .product import ProductRepository
from .library import LibraryRepository
from .purchase import PurchaseRepository
from .progress import ProgressRepository
from .user import UserRepository

__all__ = [
    'ProductRepository',
    'LibraryRepository',
    'PurchaseRepository',
    'ProgressRepository',
    'UserRepository',
]
