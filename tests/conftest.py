# tests/conftest.py
import sys
import pytest
from pathlib import Path
from datetime import datetime, UTC

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from core.config import Settings
from core.sa.database import Database
from core.sa.models import Product, ProductType, LibraryEntry, Purchase, User, EntrySource

AUDIO_BYTES = bytes(i % 256 for i in range(1000))
EBOOK_BYTES = b"%PDF-1.4 test e-book body"


@pytest.fixture
def database(tmp_path):
    """Create a fresh SQLite database for each test"""
    db = Database(f"sqlite:///{tmp_path / 'test_shelfstream.db'}")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def content_root(tmp_path):
    """Content directory with one e-book and one 1000-byte audio file, plus a file outside it."""
    root = tmp_path / "content"
    (root / "ebooks").mkdir(parents=True)
    (root / "audio").mkdir()
    (root / "ebooks" / "origin.pdf").write_bytes(EBOOK_BYTES)
    (root / "ebooks" / "mindos.epub").write_bytes(b"epub body")
    (root / "audio" / "origin.mp3").write_bytes(AUDIO_BYTES)
    (tmp_path / "secret.txt").write_text("outside the content root")
    return root


@pytest.fixture
def settings(database, content_root):
    return Settings(
        database_url=database.connection_string,
        content_root=str(content_root),
        jwt_secret="test-secret",
        payment_key_secret="test-payment-secret",
        stream_chunk_size=64,
    )


@pytest.fixture
def catalog(db_session):
    """A small catalog covering every product type."""
    products = {
        "ebook": Product(
            id="ebook-1",
            title="The Origin Code",
            type=ProductType.EBOOK.value,
            file_path="ebooks/origin.pdf",
            thumbnail="thumbs/origin.jpg",
        ),
        "audiobook": Product(
            id="audio-1",
            title="The Origin Code",
            type=ProductType.AUDIOBOOK.value,
            file_path="audio/origin.mp3",
            thumbnail="thumbs/origin-audio.jpg",
        ),
        "mindos": Product(
            id="ebook-2",
            title="EFV™ VOL 2: MINDOS™",
            type=ProductType.EBOOK.value,
            file_path="ebooks/mindos.epub",
        ),
        "hardcover": Product(
            id="hard-1",
            title="The Origin Code",
            type=ProductType.HARDCOVER.value,
        ),
        "escape": Product(
            id="ebook-escape",
            title="Escaping Book",
            type=ProductType.EBOOK.value,
            file_path="../secret.txt",
        ),
        "missing": Product(
            id="audio-missing",
            title="Vanished Audio",
            type=ProductType.AUDIOBOOK.value,
            file_path="audio/gone.mp3",
        ),
    }
    db_session.add_all(products.values())
    db_session.commit()
    return products


@pytest.fixture
def sample_user(db_session):
    user = User(id="user-1", name="Test Reader", email="reader@example.com")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def add_entry(db_session):
    """Factory fixture writing a raw library entry."""
    def _add(user_id, product_id, title=None, type_label=None, purchased_at=None,
             progress=0, source=EntrySource.PRIMARY):
        entry = LibraryEntry(
            user_id=user_id,
            product_id=product_id,
            title=title,
            type_label=type_label,
            purchased_at=purchased_at,
            progress=progress,
            source=source.value,
        )
        db_session.add(entry)
        db_session.commit()
        return entry
    return _add


@pytest.fixture
def add_purchase(db_session):
    """Factory fixture writing a legacy purchase."""
    def _add(user_id, product_id, purchased_at=None):
        purchase = Purchase(
            user_id=user_id,
            product_id=product_id,
            purchased_at=purchased_at or datetime.now(UTC),
        )
        db_session.add(purchase)
        db_session.commit()
        return purchase
    return _add
