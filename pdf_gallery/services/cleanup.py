# pdf_gallery/services/cleanup.py
from pathlib import Path

from ..config import settings
from ..utils.files import delete_file
from ..utils.logging import service_logger


class CleanupService:
    """Service to handle removal of stored PDF files"""

    @staticmethod
    def delete_pdf_blob(pdf_id: int, file_path: str) -> bool:
        """Best-effort removal of a PDF's stored file once its record is gone.

        Never raises: a file left on disk is logged and reported through the
        return value so the record deletion still succeeds.
        """
        blob_path = settings.STORAGE_PATH / file_path
        if not blob_path.exists():
            service_logger.warning("Stored PDF file already missing", extra={
                "pdf_id": pdf_id,
                "file_path": file_path
            })
            return True

        removed = delete_file(blob_path)
        if removed:
            service_logger.info("Deleted stored PDF file", extra={
                "pdf_id": pdf_id,
                "file_path": file_path
            })
        else:
            service_logger.error("Stored PDF file left on disk after record deletion", extra={
                "pdf_id": pdf_id,
                "file_path": file_path
            })
        return removed

    @staticmethod
    def discard_orphaned_upload(stored_path: Path) -> None:
        """Remove a freshly written upload whose record could not be created"""
        if delete_file(stored_path):
            service_logger.info("Discarded upload without a record", extra={
                "stored_path": str(stored_path)
            })


cleanup_service = CleanupService()
