# tests/test_sa/test_repositories/test_library_repository.py
import pytest
from datetime import datetime, UTC
from core.models.library import LibraryItem
from core.sa.models import LibraryEntry, EntrySource
from core.sa.repositories.library import LibraryRepository
from core.sa.repositories.purchase import PurchaseRepository

@pytest.fixture
def library_repo(db_session):
    """Fixture to create a LibraryRepository instance"""
    return LibraryRepository(db_session)

def test_empty_library(library_repo):
    """Test a user with no entries"""
    assert library_repo.get_entries("nobody") == []
    assert library_repo.get_items("nobody") == []
    assert library_repo.get_owned_product_ids("nobody") == set()

def test_add_item(library_repo, catalog):
    """Test persisting an item snapshot"""
    purchased = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    item = LibraryItem.from_product(catalog["ebook"], purchased_at=purchased)
    entry = library_repo.add_item("user-1", item)

    assert entry.id is not None
    assert entry.product_id == "ebook-1"
    assert entry.type_label == "E-Book"
    assert entry.source == EntrySource.PRIMARY.value

    items = library_repo.get_items("user-1")
    assert len(items) == 1
    assert items[0].product_id == "ebook-1"
    assert items[0].purchased_at == purchased
    assert items[0].file_path == "ebooks/origin.pdf"

def test_owns(library_repo, add_entry):
    """Test ownership checks are per user"""
    add_entry("user-1", "ebook-1")
    assert library_repo.owns("user-1", "ebook-1")
    assert not library_repo.owns("user-1", "audio-1")
    assert not library_repo.owns("user-2", "ebook-1")
    assert library_repo.get_owned_product_ids("user-1") == {"ebook-1"}

def test_legacy_entry_without_timestamp(library_repo, add_entry):
    """Test that a stored entry without a purchase time reads back as None"""
    add_entry("user-1", "efv_v1_ebook", title="Origin Code")
    items = library_repo.get_items("user-1")
    assert items[0].purchased_at is None
    assert items[0].progress == 0

def test_replace_items_overwrites(library_repo, db_session, add_entry, catalog):
    """Test that replace_items leaves exactly the given items behind"""
    add_entry("user-1", "stale-product")
    add_entry("user-2", "ebook-1")

    items = [
        LibraryItem.from_product(catalog["ebook"], source=EntrySource.LEGACY_MIGRATED),
        LibraryItem.from_product(catalog["audiobook"], source=EntrySource.LEGACY_MIGRATED),
    ]
    library_repo.replace_items("user-1", items)
    library_repo.replace_items("user-1", items)

    entries = library_repo.get_entries("user-1")
    assert [e.product_id for e in entries] == ["ebook-1", "audio-1"]
    assert all(e.source == EntrySource.LEGACY_MIGRATED.value for e in entries)
    # Other users are untouched
    assert library_repo.get_owned_product_ids("user-2") == {"ebook-1"}
    assert db_session.query(LibraryEntry).count() == 3

def test_purchase_history(db_session, catalog, add_purchase):
    """Test reading purchases with their products"""
    add_purchase("user-1", "audio-1")
    add_purchase("user-1", "hard-1")
    repo = PurchaseRepository(db_session)

    purchases = repo.get_for_user("user-1")
    assert [p.product.id for p in purchases] == ["audio-1", "hard-1"]
    assert repo.has_purchased("user-1", "audio-1")
    assert not repo.has_purchased("user-1", "ebook-1")
    assert not repo.has_purchased("user-2", "audio-1")
