# core/services/library_reconciler.py
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from core.legacy.demo_users import DemoUserStore
from core.models.library import LibraryItem
from core.sa.models import EntrySource, ProductType
from core.sa.repositories import LibraryRepository, ProductRepository, PurchaseRepository

logger = logging.getLogger(__name__)


class LibraryReconciler:
    """Builds a user's library view from every entitlement source we know of.

    Sources, in precedence order:

    1. library entries stored for the user (ground truth)
    2. the demo users file, a best-effort supplement keyed by email
    3. historical purchases, consulted only when 1 and 2 yield nothing and
       then written back as the user's library (one-time migration)

    Every entry is re-synchronized against the live catalog, first by id and
    then by a fuzzy title+type match. Entries the catalog cannot explain are
    still returned as stored.
    """

    def __init__(self, session: Session, demo_store: Optional[DemoUserStore] = None):
        self.session = session
        self.products = ProductRepository(session)
        self.library = LibraryRepository(session)
        self.purchases = PurchaseRepository(session)
        self.demo_store = demo_store

    def reconcile(self, user_id: str, user_key: Optional[str] = None) -> List[LibraryItem]:
        """Return the deduplicated, catalog-enriched library for a user.

        Args:
            user_id: The user's identifier in the entitlement store
            user_key: Key of the user in the demo users file (their email);
                defaults to user_id

        Returns:
            Items newest first, or, right after a purchase migration, in
            purchase order
        """
        raw_items = self.library.get_items(user_id)
        fallback_items = self._load_fallback(user_key or user_id)

        merged: Dict[str, LibraryItem] = {}
        for item in raw_items + fallback_items:
            synced = self.synchronize(item)
            if not synced.product_id:
                logger.debug(f"Skipping library item without product reference: {synced.title!r}")
                continue
            merged.setdefault(synced.product_id, synced)

        library = list(merged.values())

        if not library:
            migrated = self.migrate_purchases(user_id)
            if migrated:
                return migrated

        library.sort(key=lambda item: item.sort_key, reverse=True)
        return library

    def synchronize(self, item: LibraryItem) -> LibraryItem:
        """Refresh an item's display fields from the catalog.

        Lookup goes by stored id first, then by normalized title within the
        item's type. Any failure leaves the item untouched.
        """
        try:
            product = self.products.get_by_id(item.product_id)
            if product is None:
                product = self.products.find_by_title(item.title, ProductType.from_label(item.type))
        except Exception:
            logger.exception(f"Library item sync failed for {item.product_id!r} ({item.title!r})")
            self.session.rollback()
            return item

        if product is None:
            return item
        return item.synchronized_with(product)

    def migrate_purchases(self, user_id: str) -> List[LibraryItem]:
        """Derive library items from digital purchases and persist them.

        Returns:
            The migrated items, empty when the user bought nothing digital
        """
        items: Dict[str, LibraryItem] = {}
        for purchase in self.purchases.get_for_user(user_id):
            product = purchase.product
            if product is None or not product.is_digital:
                continue
            items.setdefault(product.id, LibraryItem.from_product(
                product,
                purchased_at=purchase.purchased_at,
                source=EntrySource.LEGACY_MIGRATED,
            ))

        if items:
            self.library.replace_items(user_id, items.values())
            logger.info(f"Migrated {len(items)} purchased items into library for user {user_id}")
        return list(items.values())

    def _load_fallback(self, user_key: str) -> List[LibraryItem]:
        if self.demo_store is None:
            return []
        try:
            return self.demo_store.get_library(user_key)
        except Exception as e:
            logger.warning(f"Demo library fallback unavailable for {user_key}: {e}")
            return []
