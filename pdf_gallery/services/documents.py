# pdf_gallery/services/documents.py
"""PDF lifecycle: upload, read, download, update and delete.

Access rules:
- a caller can see a PDF they own or any public PDF;
- only the owner can change or delete a PDF.

A PDF the caller cannot see is reported as missing (NotFoundError) rather
than forbidden, so private documents do not leak their existence. Forbidden
is only raised for a public PDF the caller does not own.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import FileMissingError, ForbiddenError, NotFoundError
from ..models import PdfDocument, User
from ..repositories import PdfRepository
from ..schemas.pdf import PdfUpdate
from ..utils.files import get_relative_path, resolve_stored_path, save_pdf_upload
from ..utils.logging import service_logger
from ..utils.tags import normalize_tags
from .cleanup import cleanup_service
from .query import ListParams, build_query

MUTABLE_FIELDS = ("title", "description", "tags", "is_public")


@dataclass
class DeleteOutcome:
    """Result of the two-phase delete.

    ``record_deleted`` is always True once delete() returns. ``blob_removed``
    is False when the stored file could not be removed; the file is then left
    on disk with no record pointing at it.
    """
    pdf_id: int
    file_path: str
    record_deleted: bool
    blob_removed: bool


@dataclass
class Download:
    pdf: PdfDocument
    path: Path


class DocumentService:
    def list_pdfs(self, db: Session, caller: User, params: ListParams) -> List[PdfDocument]:
        spec = build_query(caller.id, params)
        return PdfRepository(db).find(spec)

    async def upload(
            self,
            db: Session,
            caller: User,
            upload_file: Optional[UploadFile],
            title: Optional[str] = None,
            description: Optional[str] = None,
            tags=None,
            is_public: bool = False,
    ) -> PdfDocument:
        stored = await save_pdf_upload(upload_file, settings.UPLOADS_PATH)

        title = (title or "").strip() or upload_file.filename
        description = (description or "").strip() or None

        try:
            pdf = PdfDocument(
                title=title,
                description=description,
                owner_id=caller.id,
                is_public=is_public,
                file_size=stored.size,
                file_path=get_relative_path(stored.path, settings.STORAGE_PATH),
            )
            pdf.tags = normalize_tags(tags)
            pdf = PdfRepository(db).add(pdf)
        except Exception:
            db.rollback()
            cleanup_service.discard_orphaned_upload(stored.path)
            raise

        service_logger.info("Stored new PDF", extra={
            "pdf_id": pdf.id,
            "owner_id": caller.id,
            "file_size": pdf.file_size
        })
        return pdf

    def _visible(self, db: Session, caller: User, pdf_id: int) -> PdfDocument:
        pdf = PdfRepository(db).get(pdf_id)
        if pdf is None or not (pdf.owner_id == caller.id or pdf.is_public):
            raise NotFoundError()
        return pdf

    def _owned(self, db: Session, caller: User, pdf_id: int) -> PdfDocument:
        pdf = self._visible(db, caller, pdf_id)
        if pdf.owner_id != caller.id:
            raise ForbiddenError()
        return pdf

    def get(self, db: Session, caller: User, pdf_id: int) -> PdfDocument:
        return self._visible(db, caller, pdf_id)

    def resolve_download(self, db: Session, caller: User, pdf_id: int) -> Download:
        pdf = self._visible(db, caller, pdf_id)
        path = resolve_stored_path(pdf.file_path)
        if not path.is_file():
            service_logger.error("Stored file missing for PDF record", extra={
                "pdf_id": pdf.id,
                "file_path": pdf.file_path
            })
            raise FileMissingError()
        return Download(pdf=pdf, path=path)

    def update(self, db: Session, caller: User, pdf_id: int, changes: PdfUpdate) -> PdfDocument:
        pdf = self._owned(db, caller, pdf_id)

        for field, value in changes.model_dump(include=set(MUTABLE_FIELDS), exclude_unset=True).items():
            if field in ("title", "tags", "is_public") and value is None:
                continue
            if field == "description" and value is not None:
                value = value.strip() or None
            setattr(pdf, field, value)

        try:
            return PdfRepository(db).save(pdf)
        except Exception:
            db.rollback()
            raise

    def delete(self, db: Session, caller: User, pdf_id: int) -> DeleteOutcome:
        pdf = self._owned(db, caller, pdf_id)
        pdf_id, file_path = pdf.id, pdf.file_path

        # Phase one: the record goes first and is committed on its own
        try:
            PdfRepository(db).delete(pdf)
        except Exception:
            db.rollback()
            raise

        # Phase two: the file is removed best-effort
        blob_removed = cleanup_service.delete_pdf_blob(pdf_id, file_path)
        return DeleteOutcome(
            pdf_id=pdf_id,
            file_path=file_path,
            record_deleted=True,
            blob_removed=blob_removed,
        )


document_service = DocumentService()
