# core/services/library_service.py
import logging
from datetime import datetime, UTC
from typing import List

from sqlalchemy.orm import Session

from core.errors import AlreadyOwnedError, NotFoundError
from core.models.library import LibraryItem
from core.sa.repositories import LibraryRepository, ProductRepository

logger = logging.getLogger(__name__)


class LibraryService:
    def __init__(self, session: Session):
        self.products = ProductRepository(session)
        self.library = LibraryRepository(session)

    def add_product(self, user_id: str, product_id: str) -> List[LibraryItem]:
        """Add a digital product to a user's library.

        Args:
            user_id: The owning user
            product_id: Catalog id or known legacy demo id

        Returns:
            The user's stored library after the add

        Raises:
            NotFoundError: the id resolves to nothing digital
            AlreadyOwnedError: the product is already in the library
        """
        product = self.products.resolve(product_id)
        if product is None or not product.is_digital:
            raise NotFoundError("Product not found")

        if self.library.owns(user_id, product.id):
            raise AlreadyOwnedError()

        self.library.add_item(user_id, LibraryItem.from_product(product, purchased_at=datetime.now(UTC)))
        logger.info(f"Added {product.id} to library of user {user_id}")
        return self.library.get_items(user_id)
