# core/models/library.py

from datetime import datetime, UTC
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from core.sa.models import EntrySource, LibraryEntry, Product

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class LibraryItem(BaseModel):
    """One entitlement as seen by the reconciler, whatever store it came from."""
    product_id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    thumbnail: Optional[str] = None
    file_path: Optional[str] = None
    purchased_at: Optional[datetime] = None
    progress: float = 0
    source: EntrySource = EntrySource.PRIMARY

    model_config = ConfigDict(from_attributes=True)

    @field_validator('purchased_at', mode='before')
    @classmethod
    def _empty_timestamp(cls, value: Any) -> Any:
        if value == '':
            return None
        return value

    @field_validator('purchased_at')
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator('product_id', mode='before')
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if value is None or value == '':
            return None
        return str(value)

    @field_validator('progress', mode='before')
    @classmethod
    def _default_progress(cls, value: Any) -> Any:
        return value or 0

    @property
    def sort_key(self) -> datetime:
        return self.purchased_at or EPOCH

    @classmethod
    def from_entry(cls, entry: LibraryEntry) -> "LibraryItem":
        return cls(
            product_id=entry.product_id,
            title=entry.title,
            type=entry.type_label,
            thumbnail=entry.thumbnail,
            file_path=entry.file_path,
            purchased_at=entry.purchased_at,
            progress=entry.progress,
            source=EntrySource(entry.source),
        )

    @classmethod
    def from_product(
        cls,
        product: Product,
        purchased_at: Optional[datetime] = None,
        source: EntrySource = EntrySource.PRIMARY,
    ) -> "LibraryItem":
        return cls(
            product_id=product.id,
            title=product.title,
            type=product.product_type.label if product.product_type else None,
            thumbnail=product.thumbnail,
            file_path=product.file_path,
            purchased_at=purchased_at,
            source=source,
        )

    @classmethod
    def from_legacy_record(cls, record: Dict[str, Any], source: EntrySource = EntrySource.DEMO_FALLBACK) -> "LibraryItem":
        """Build an item from a loosely shaped JSON record.

        Legacy records spell the same field several ways (productId/_id/id,
        title/name, purchasedAt/createdAt); the first present value wins.
        """
        def first(*keys: str) -> Any:
            for key in keys:
                value = record.get(key)
                if value not in (None, ''):
                    return value
            return None

        return cls(
            product_id=first('productId', '_id', 'id'),
            title=first('title', 'name'),
            type=first('type'),
            thumbnail=first('thumbnail'),
            file_path=first('filePath', 'file_path'),
            purchased_at=first('purchasedAt', 'createdAt'),
            progress=first('progress') or 0,
            source=source,
        )

    def synchronized_with(self, product: Product) -> "LibraryItem":
        """Copy of this item with display fields refreshed from the catalog.

        Acquisition time, progress and source are kept from the entry.
        """
        return self.model_copy(update={
            'product_id': product.id,
            'title': product.title,
            'type': product.product_type.label if product.product_type else self.type,
            'thumbnail': product.thumbnail or self.thumbnail,
            'file_path': product.file_path or self.file_path,
        })
