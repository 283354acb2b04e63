# core/sa/repositories/library.py
from typing import Iterable, List, Set
from sqlalchemy.orm import Session

from core.models.library import LibraryItem
from core.sa.models import LibraryEntry, EntrySource


class LibraryRepository:
    """Entitlement store: the library entries owned by each user."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_entries(self, user_id: str) -> List[LibraryEntry]:
        """Get all raw library entries for a user, oldest row first.

        Args:
            user_id: The user identifier

        Returns:
            List of LibraryEntry rows (possibly empty)
        """
        return (
            self.session.query(LibraryEntry)
            .filter(LibraryEntry.user_id == user_id)
            .order_by(LibraryEntry.id)
            .all()
        )

    def get_items(self, user_id: str) -> List[LibraryItem]:
        return [LibraryItem.from_entry(entry) for entry in self.get_entries(user_id)]

    def get_owned_product_ids(self, user_id: str) -> Set[str]:
        rows = (
            self.session.query(LibraryEntry.product_id)
            .filter(LibraryEntry.user_id == user_id)
            .all()
        )
        return {row.product_id for row in rows}

    def owns(self, user_id: str, product_id: str) -> bool:
        return (
            self.session.query(LibraryEntry.id)
            .filter(LibraryEntry.user_id == user_id, LibraryEntry.product_id == product_id)
            .first()
        ) is not None

    def add_item(self, user_id: str, item: LibraryItem, commit: bool = True) -> LibraryEntry:
        """Persist one library item for a user.

        Args:
            user_id: The owning user
            item: The item to snapshot into a row
            commit: Commit immediately (callers batching several adds pass False)

        Returns:
            The created LibraryEntry
        """
        entry = LibraryEntry(
            user_id=user_id,
            product_id=item.product_id,
            title=item.title,
            type_label=item.type,
            thumbnail=item.thumbnail,
            file_path=item.file_path,
            purchased_at=item.purchased_at,
            progress=item.progress,
            source=(item.source or EntrySource.PRIMARY).value,
        )
        self.session.add(entry)
        if commit:
            self.session.commit()
        return entry

    def replace_items(self, user_id: str, items: Iterable[LibraryItem]) -> List[LibraryEntry]:
        """Overwrite a user's library with the given items in one transaction.

        Running this twice with the same items leaves the same rows behind,
        which is what makes concurrent one-time migrations harmless.
        """
        try:
            self.session.query(LibraryEntry).filter(LibraryEntry.user_id == user_id).delete()
            entries = [self.add_item(user_id, item, commit=False) for item in items]
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return entries
