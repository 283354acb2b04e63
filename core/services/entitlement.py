# core/services/entitlement.py
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import InternalError, NotFoundError, UnauthorizedError
from core.sa.models import Product, ProductType
from core.sa.repositories import LibraryRepository, ProductRepository, PurchaseRepository

logger = logging.getLogger(__name__)


class EntitlementGate:
    """Decides whether a user may receive the bytes of a product.

    The check is read-only. Outcomes map onto the error taxonomy:

    * product unknown, or not of the type the endpoint serves -> NotFoundError
    * product known but not owned -> UnauthorizedError
    * store or catalog fault -> InternalError
    """

    def __init__(self, session: Session):
        self.products = ProductRepository(session)
        self.library = LibraryRepository(session)
        self.purchases = PurchaseRepository(session)

    def is_entitled(self, user_id: str, product: Product, requested_id: Optional[str] = None) -> bool:
        """True when the product sits in the user's library or purchase history.

        ``requested_id`` covers library rows written under a legacy alias of
        the product rather than its catalog id.
        """
        owned = self.library.get_owned_product_ids(user_id)
        if product.id in owned or (requested_id and requested_id in owned):
            return True
        return self.purchases.has_purchased(user_id, product.id)

    def check(self, user_id: str, product_id: str, product_type: Optional[ProductType] = None) -> Product:
        """Return the product if the user may stream it, raise otherwise.

        Args:
            user_id: Verified identity of the caller
            product_id: Catalog id or legacy demo alias
            product_type: Type the calling endpoint serves; None accepts any

        Returns:
            The resolved Product
        """
        label = product_type.label if product_type else "Product"
        try:
            product = self.products.resolve(product_id)
            if product is None or (product_type is not None and product.type != product_type.value):
                raise NotFoundError(f"{label} not found")
            entitled = self.is_entitled(user_id, product, requested_id=product_id)
        except SQLAlchemyError as e:
            logger.exception(f"Entitlement lookup failed for user {user_id}, product {product_id}")
            raise InternalError() from e

        if not entitled:
            logger.info(f"Denied {label.lower()} {product.id} to user {user_id}: not owned")
            raise UnauthorizedError("You do not have access to this content")
        return product
