# tests/conftest.py
from datetime import datetime
from uuid import uuid4
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from pathlib import Path
import shutil
import tempfile
import os

from pdf_gallery.main import app
from pdf_gallery.database import Base, get_db, install_sqlite_functions
from pdf_gallery.models import User, PdfDocument
from pdf_gallery.auth import hash_password, create_access_token
from pdf_gallery.config import settings

# Create test database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << /Root 1 0 R >>\n%%EOF\n"
TEST_PASSWORD = "s3cret-pass"

@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    return install_sqlite_functions(engine)

@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables in the test database"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Creates a new database session for a test"""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="session")
def temp_storage_dir():
    """Create temporary storage directory for test files"""
    temp_dir = tempfile.mkdtemp()
    Path(temp_dir, "uploads").mkdir(parents=True, exist_ok=True)
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)

@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir):
    """Override settings for testing"""
    original_storage = settings.STORAGE_PATH
    original_uploads = settings.UPLOADS_PATH

    # Override settings
    settings.STORAGE_PATH = temp_storage_dir
    settings.UPLOADS_PATH = temp_storage_dir / "uploads"

    yield

    # Restore settings
    settings.STORAGE_PATH = original_storage
    settings.UPLOADS_PATH = original_uploads

@pytest.fixture
def client(db_session):
    """Test client using the test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def make_user(db_session):
    """Factory creating users with TEST_PASSWORD"""
    def _make_user(username: str) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(TEST_PASSWORD)
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user

@pytest.fixture
def alice(make_user):
    return make_user("alice")

@pytest.fixture
def bob(make_user):
    return make_user("bob")

def auth_headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}

@pytest.fixture
def alice_headers(alice):
    return auth_headers_for(alice)

@pytest.fixture
def bob_headers(bob):
    return auth_headers_for(bob)

@pytest.fixture
def make_pdf(db_session, temp_storage_dir):
    """Factory creating PDF records backed by a file in the temp storage dir"""
    def _make_pdf(owner: User, title: str = "Test PDF", *, description=None, tags=(),
                  is_public: bool = False, file_size: int | None = None,
                  created_at: datetime | None = None) -> PdfDocument:
        relative_path = f"uploads/{uuid4().hex}.pdf"
        (temp_storage_dir / relative_path).write_bytes(PDF_BYTES)

        pdf = PdfDocument(
            title=title,
            description=description,
            owner_id=owner.id,
            is_public=is_public,
            file_size=len(PDF_BYTES) if file_size is None else file_size,
            file_path=relative_path,
            created_at=created_at or datetime.now()
        )
        pdf.tags = list(tags)
        db_session.add(pdf)
        db_session.commit()
        db_session.refresh(pdf)
        return pdf
    return _make_pdf

@pytest.fixture
def sample_pdf(make_pdf, alice):
    """A private PDF owned by alice"""
    return make_pdf(alice, "Quarterly Invoice", description="Q1 numbers", tags=["work", "2024"])

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up test files after all tests are done"""
    yield
    for file in ["pdf_gallery.db", "test.db"]:
        if os.path.exists(file):
            os.remove(file)

@pytest.fixture
def password():
    """Plain-text password of every user made by make_user"""
    return TEST_PASSWORD
