# core/sa/repositories/product.py
import re
from typing import List, Optional
from sqlalchemy.orm import Session

from core.legacy.aliases import lookup_alias
from core.sa.models import Product, ProductType
from core.utils.titles import normalize_title


class ProductRepository:
    """Read access to the product catalog."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, product_id: Optional[str]) -> Optional[Product]:
        """Get a product by its identifier.

        Identifiers are compared as opaque strings, so human-readable legacy
        ids resolve the same way as generated ones.

        Args:
            product_id: The product identifier

        Returns:
            The Product if found, None otherwise
        """
        if not product_id:
            return None
        return self.session.get(Product, str(product_id))

    def resolve(self, product_id: Optional[str]) -> Optional[Product]:
        """Resolve a catalog id or a known legacy demo id to a product.

        Args:
            product_id: Catalog identifier, or one of the aliases in DEMO_ALIASES

        Returns:
            The Product if either lookup succeeds, None otherwise
        """
        product = self.get_by_id(product_id)
        if product is None:
            alias = lookup_alias(product_id)
            if alias is not None:
                product = self.find_by_title_pattern(alias.title, alias.type)
        return product

    def list_products(self, product_type: Optional[ProductType] = None) -> List[Product]:
        query = self.session.query(Product)
        if product_type is not None:
            query = query.filter(Product.type == product_type.value)
        return query.order_by(Product.title).all()

    def find_by_title(self, title: Optional[str], product_type: Optional[ProductType]) -> Optional[Product]:
        """Fuzzy lookup by title within one product type.

        Both sides are normalized with normalize_title. An exact normalized
        match wins; otherwise the first catalog title containing the search
        title is returned.

        Args:
            title: Title as stored on a library record
            product_type: Required product type; no match is attempted without one

        Returns:
            The best matching Product, or None
        """
        search = normalize_title(title)
        if not search or product_type is None:
            return None

        candidates = self.list_products(product_type)
        for product in candidates:
            if normalize_title(product.title) == search:
                return product
        for product in candidates:
            if search in normalize_title(product.title):
                return product
        return None

    def find_by_title_pattern(self, pattern: re.Pattern, product_type: ProductType) -> Optional[Product]:
        """Return the first product of the given type whose raw title matches a regex."""
        for product in self.list_products(product_type):
            if pattern.search(product.title):
                return product
        return None

    def create_product(self, **fields) -> Product:
        """Create a catalog product. Used by the CLI importer and tests."""
        product = Product(**fields)
        self.session.add(product)
        self.session.commit()
        return product
