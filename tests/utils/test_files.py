# tests/utils/test_files.py
import pytest
import io
from pathlib import Path
from fastapi import UploadFile
from starlette.datastructures import Headers

from pdf_gallery.errors import FileTooLargeError, InvalidFileError
from pdf_gallery.utils.files import (
    save_pdf_upload, delete_file, get_relative_path, download_filename, generate_storage_name,
    content_disposition
)

@pytest.fixture
def mock_upload_file():
    def _create_upload_file(filename: str, content: bytes, content_type: str = "application/pdf"):
        return UploadFile(
            file=io.BytesIO(content),
            filename=filename,
            headers=Headers({"content-type": content_type})
        )
    return _create_upload_file

@pytest.mark.asyncio
async def test_save_pdf_upload(mock_upload_file, temp_storage_dir):
    """Test saving an uploaded PDF"""
    test_content = b"%PDF-1.7 test file content"
    upload_file = mock_upload_file("../../evil name.pdf", test_content)

    stored = await save_pdf_upload(upload_file, temp_storage_dir / "uploads")

    assert stored.path.exists()
    assert stored.path.parent == temp_storage_dir / "uploads"
    assert stored.path.read_bytes() == test_content
    assert stored.size == len(test_content)
    assert stored.path.suffix == ".pdf"
    assert "evil" not in stored.path.name

@pytest.mark.asyncio
async def test_save_pdf_upload_creates_directory(mock_upload_file, temp_storage_dir):
    """Test saving file creates directory if it doesn't exist"""
    new_dir = temp_storage_dir / "new_directory"

    stored = await save_pdf_upload(mock_upload_file("a.pdf", b"content"), new_dir)

    assert new_dir.exists()
    assert stored.path.read_bytes() == b"content"

@pytest.mark.asyncio
async def test_save_rejects_wrong_content_type(mock_upload_file, temp_storage_dir):
    target = temp_storage_dir / "rejected"
    with pytest.raises(InvalidFileError):
        await save_pdf_upload(mock_upload_file("a.pdf", b"x", "image/png"), target)
    assert not target.exists() or not any(target.iterdir())

@pytest.mark.asyncio
async def test_save_accepts_content_type_parameters(mock_upload_file, temp_storage_dir):
    upload_file = mock_upload_file("a.pdf", b"x", "Application/PDF; charset=binary")
    stored = await save_pdf_upload(upload_file, temp_storage_dir / "params")
    assert stored.size == 1

@pytest.mark.asyncio
async def test_save_enforces_size_limit(mock_upload_file, temp_storage_dir):
    target = temp_storage_dir / "too_big"
    with pytest.raises(FileTooLargeError):
        await save_pdf_upload(mock_upload_file("a.pdf", b"x" * 2048), target, max_bytes=1024)
    assert list(target.iterdir()) == []

@pytest.mark.asyncio
async def test_save_accepts_exact_limit(mock_upload_file, temp_storage_dir):
    stored = await save_pdf_upload(mock_upload_file("a.pdf", b"x" * 1024), temp_storage_dir / "exact",
                                   max_bytes=1024)
    assert stored.size == 1024

@pytest.mark.asyncio
async def test_save_rejects_missing_file(temp_storage_dir):
    with pytest.raises(InvalidFileError):
        await save_pdf_upload(None, temp_storage_dir / "missing")

def test_delete_file(temp_storage_dir):
    path = temp_storage_dir / "delete-me.pdf"
    path.write_bytes(b"x")

    assert delete_file(path) is True
    assert not path.exists()
    # Already gone is not a failure
    assert delete_file(path) is True

def test_get_relative_path(temp_storage_dir):
    path = temp_storage_dir / "uploads" / "a.pdf"
    assert get_relative_path(path, temp_storage_dir) == "uploads/a.pdf"

def test_get_relative_path_outside_base(temp_storage_dir):
    with pytest.raises(ValueError):
        get_relative_path(Path("/somewhere/else.pdf"), temp_storage_dir)

@pytest.mark.parametrize("title,expected", [
    ("Invoice", "Invoice.pdf"),
    ("report.PDF", "report.PDF"),
    ('a "quoted"/name', "a _quoted_name.pdf"),
    ("   ", "document.pdf"),
])
def test_download_filename(title, expected):
    assert download_filename(title) == expected

def test_generate_storage_name_is_unique():
    names = {generate_storage_name() for _ in range(50)}
    assert len(names) == 50
    assert all(name.endswith(".pdf") for name in names)

@pytest.mark.parametrize("filename,expected", [
    ("Invoice.pdf", 'attachment; filename="Invoice.pdf"'),
    ("March Invoice.pdf", 'attachment; filename="March Invoice.pdf"'),
    ("Über.pdf", "attachment; filename=\"_ber.pdf\"; filename*=utf-8''%C3%9Cber.pdf"),
])
def test_content_disposition(filename, expected):
    assert content_disposition(filename) == expected

def test_download_filename_strips_control_characters():
    assert download_filename("line\r\nbreak") == "line_break.pdf"
