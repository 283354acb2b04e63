# api/routes/library.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.auth import CurrentUser, get_current_user
from api.dependencies import get_demo_store, get_library_key
from api.schemas.library import (
    LibraryAddRequest, LibraryAddResponse, LibraryItemSchema,
    ProgressRecordSchema, ProgressSchema, ProgressUpdate
)
from core.legacy.demo_users import DemoUserStore
from core.sa.database import get_db
from core.sa.repositories import ProgressRepository
from core.services.library_reconciler import LibraryReconciler
from core.services.library_service import LibraryService

router = APIRouter(prefix="/library", tags=["library"])


@router.get("/my-library", response_model=List[LibraryItemSchema])
def get_my_library(
    user: CurrentUser = Depends(get_current_user),
    library_key: str = Depends(get_library_key),
    demo_store: Optional[DemoUserStore] = Depends(get_demo_store),
    db: Session = Depends(get_db),
):
    """
    Get the caller's digital library.

    Stored entries, demo fallback records and (for users with neither)
    historical purchases are merged, refreshed from the catalog and
    deduplicated. Newest acquisitions come first.
    """
    reconciler = LibraryReconciler(db, demo_store)
    items = reconciler.reconcile(user.id, user_key=library_key)
    return [LibraryItemSchema.from_item(item) for item in items]


@router.post("/progress", response_model=ProgressRecordSchema)
def save_progress(
    update: ProgressUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    repo = ProgressRepository(db)
    record = repo.save(user.id, update.product_id, progress=update.progress, total=update.total)
    return ProgressRecordSchema.from_record(record)


@router.get("/progress/{product_id}", response_model=ProgressSchema)
def get_progress(
    product_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the saved checkpoint, or zeros when nothing was saved yet."""
    record = ProgressRepository(db).get(user.id, product_id)
    if record is None:
        return ProgressSchema()
    return ProgressSchema(progress=record.progress, total=record.total)


@router.post("/add", response_model=LibraryAddResponse, status_code=status.HTTP_201_CREATED)
def add_to_library(
    request: LibraryAddRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Add a digital product to the caller's library.

    Accepts catalog ids and the known legacy demo ids. Returns 400 when the
    product is already owned and 404 when it cannot be resolved.
    """
    items = LibraryService(db).add_product(user.id, request.product_id)
    return LibraryAddResponse(
        message="Product added to library successfully",
        library=[LibraryItemSchema.from_item(item) for item in items],
    )
