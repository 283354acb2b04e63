# api/schemas/library.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.models.library import LibraryItem
from core.sa.models import UserProgress


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LibraryItemSchema(CamelModel):
    product_id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    thumbnail: Optional[str] = None
    file_path: Optional[str] = None
    purchased_at: Optional[datetime] = None
    progress: float = 0

    @classmethod
    def from_item(cls, item: LibraryItem) -> "LibraryItemSchema":
        return cls(
            product_id=item.product_id,
            title=item.title,
            type=item.type,
            thumbnail=item.thumbnail,
            file_path=item.file_path,
            purchased_at=item.purchased_at,
            progress=item.progress,
        )


class LibraryAddRequest(CamelModel):
    product_id: str = Field(min_length=1)


class LibraryAddResponse(CamelModel):
    message: str
    library: List[LibraryItemSchema]


class ProgressUpdate(CamelModel):
    product_id: str = Field(min_length=1)
    progress: float = Field(ge=0)
    total: float = Field(ge=0)


class ProgressSchema(CamelModel):
    progress: float = 0
    total: float = 0


class ProgressRecordSchema(ProgressSchema):
    product_id: str
    last_updated: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: UserProgress) -> "ProgressRecordSchema":
        return cls(
            product_id=record.product_id,
            progress=record.progress,
            total=record.total,
            last_updated=record.last_updated,
        )
