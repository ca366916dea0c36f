# pdf_gallery/utils/files.py
import re
import time
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote
from uuid import uuid4
from fastapi import UploadFile
from ..config import settings
from ..errors import FileTooLargeError, InvalidFileError
from .logging import service_logger

PDF_CONTENT_TYPE = "application/pdf"


@dataclass
class StoredFile:
    path: Path
    size: int


def generate_storage_name() -> str:
    """Unique on-disk name; the client's filename is never used for storage"""
    return f"{int(time.time() * 1000)}-{uuid4().hex}.pdf"


def is_pdf_upload(upload_file: UploadFile | None) -> bool:
    if upload_file is None or not upload_file.filename:
        return False
    content_type = (upload_file.content_type or "").split(";")[0].strip().lower()
    return content_type == PDF_CONTENT_TYPE


async def save_pdf_upload(upload_file: UploadFile, directory: Path, max_bytes: int | None = None) -> StoredFile:
    """Stream an uploaded PDF into ``directory`` under a generated name.

    The size limit is enforced while copying, so an oversized upload never
    leaves a file behind.

    Raises:
        InvalidFileError: no file, a non-PDF content type, or an empty body
        FileTooLargeError: the body exceeds ``max_bytes``
    """
    if not is_pdf_upload(upload_file):
        raise InvalidFileError("Only PDF files are allowed")

    max_bytes = settings.MAX_UPLOAD_SIZE if max_bytes is None else max_bytes
    directory.mkdir(parents=True, exist_ok=True)
    file_path = directory / generate_storage_name()

    size = 0
    try:
        with file_path.open("wb") as buffer:
            while True:
                chunk = await upload_file.read(settings.UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise FileTooLargeError(
                        f"File exceeds the maximum upload size of {max_bytes // (1024 * 1024)}MB"
                    )
                buffer.write(chunk)
    except BaseException:
        delete_file(file_path)
        raise

    if size == 0:
        delete_file(file_path)
        raise InvalidFileError("Uploaded file is empty")

    return StoredFile(path=file_path, size=size)


def delete_file(file_path: Path) -> bool:
    """Delete a file if it exists. Returns False when removal failed."""
    try:
        if file_path.exists():
            file_path.unlink()
        return True
    except OSError as e:
        service_logger.error("Error deleting file", extra={
            "file_path": str(file_path),
            "error": str(e)
        })
        return False


def get_relative_path(absolute_path: Path, base_path: Path) -> str:
    """Convert absolute path to relative path for database storage"""
    # Ensure both paths are absolute
    absolute_path = Path(absolute_path).absolute()
    base_path = Path(base_path).absolute()

    return absolute_path.relative_to(base_path).as_posix()


def resolve_stored_path(relative_path: str) -> Path:
    """Inverse of get_relative_path against the configured storage root"""
    return settings.STORAGE_PATH / relative_path


def download_filename(title: str) -> str:
    """Attachment filename for a PDF: its title with path and quote characters removed"""
    name = re.sub(r'[\\/"\x00-\x1f\x7f]+', "_", title).strip() or "document"
    if not name.lower().endswith(".pdf"):
        name = f"{name}.pdf"
    return name


def content_disposition(filename: str) -> str:
    """Attachment header with a quoted ASCII filename, plus RFC 5987 ``filename*`` for non-ASCII names"""
    ascii_name = "".join(c if c.isascii() else "_" for c in filename)
    header = f'attachment; filename="{ascii_name}"'
    if ascii_name != filename:
        header += f"; filename*=utf-8''{quote(filename)}"
    return header
