# pdf_gallery/api/pdfs.py
import time
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..errors import GalleryError
from ..models import User
from ..schemas.base import MessageResponse
from ..schemas.pdf import Pdf as PdfSchema, PdfList, PdfUpdate
from ..services.documents import document_service
from ..services.query import ListParams
from ..utils.files import PDF_CONTENT_TYPE, content_disposition, download_filename
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/pdfs", tags=["pdfs"])

TRUTHY_FORM_VALUES = {"true", "1", "on", "yes"}


def parse_form_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in TRUTHY_FORM_VALUES


@router.get("", response_model=PdfList)
async def list_pdfs(
        search: str = Query(""),
        sort: str = Query("newest"),
        filter: str = Query("all"),
        search_by: str = Query("all", alias="searchBy"),
        date_filter: str = Query("all", alias="dateFilter"),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    params = ListParams.parse(
        search=search,
        search_by=search_by,
        sort=sort,
        filter=filter,
        date_filter=date_filter,
    )
    api_logger.info("Listing PDFs", extra={
        "user_id": current_user.id,
        "search": params.search,
        "search_by": params.search_by.value,
        "sort": params.sort.value,
        "filter": params.filter.value,
        "date_filter": params.date_filter.value
    })

    try:
        start_time = time.time()
        pdfs = document_service.list_pdfs(db, current_user, params)

        execution_time = time.time() - start_time
        api_logger.info("Successfully listed PDFs", extra={
            "user_id": current_user.id,
            "pdf_count": len(pdfs),
            "execution_time_ms": round(execution_time * 1000, 2)
        })
        return {"pdfs": pdfs}

    except Exception as e:
        api_logger.error("Error listing PDFs", extra={
            "user_id": current_user.id,
            "error": str(e)
        })
        raise


@router.post("/upload", response_model=PdfSchema, status_code=status.HTTP_201_CREATED)
async def upload_pdf(
        file: Optional[UploadFile] = File(None),
        title: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        tags: Optional[str] = Form(None),
        is_public: Optional[str] = Form(None, alias="isPublic"),
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    api_logger.info("Uploading PDF", extra={
        "user_id": current_user.id,
        "file_name": file.filename if file else None,
        "content_type": file.content_type if file else None
    })

    try:
        start_time = time.time()
        pdf = await document_service.upload(
            db,
            current_user,
            file,
            title=title,
            description=description,
            tags=tags,
            is_public=parse_form_bool(is_public),
        )

        execution_time = time.time() - start_time
        api_logger.info("PDF uploaded successfully", extra={
            "pdf_id": pdf.id,
            "file_size": pdf.file_size,
            "execution_time_ms": round(execution_time * 1000, 2)
        })
        return pdf

    except GalleryError as e:
        api_logger.warning("PDF upload rejected", extra={
            "user_id": current_user.id,
            "reason": e.message
        })
        raise
    except Exception as e:
        api_logger.error("Error uploading PDF", extra={
            "user_id": current_user.id,
            "error": str(e)
        })
        raise


@router.get("/{pdf_id}", response_model=PdfSchema)
async def get_pdf(
        pdf_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    api_logger.info("Retrieving PDF", extra={"pdf_id": pdf_id, "user_id": current_user.id})

    try:
        return document_service.get(db, current_user, pdf_id)
    except GalleryError:
        api_logger.warning("PDF not found", extra={"pdf_id": pdf_id, "user_id": current_user.id})
        raise


@router.get("/{pdf_id}/download")
async def download_pdf(
        pdf_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    api_logger.info("Downloading PDF", extra={"pdf_id": pdf_id, "user_id": current_user.id})

    try:
        download = document_service.resolve_download(db, current_user, pdf_id)
    except GalleryError as e:
        api_logger.warning("PDF download refused", extra={
            "pdf_id": pdf_id,
            "user_id": current_user.id,
            "reason": e.code
        })
        raise

    return FileResponse(
        download.path,
        media_type=PDF_CONTENT_TYPE,
        headers={"Content-Disposition": content_disposition(download_filename(download.pdf.title))}
    )


@router.put("/{pdf_id}", response_model=PdfSchema)
async def update_pdf(
        pdf_id: int,
        changes: PdfUpdate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    api_logger.info("Updating PDF", extra={
        "pdf_id": pdf_id,
        "user_id": current_user.id,
        "update_fields": list(changes.model_dump(exclude_unset=True).keys())
    })

    try:
        pdf = document_service.update(db, current_user, pdf_id, changes)
        api_logger.info("Successfully updated PDF", extra={"pdf_id": pdf_id})
        return pdf

    except GalleryError as e:
        api_logger.warning("PDF update refused", extra={"pdf_id": pdf_id, "reason": e.code})
        raise
    except Exception as e:
        api_logger.error("Error updating PDF", extra={
            "pdf_id": pdf_id,
            "error": str(e)
        })
        raise


@router.delete("/{pdf_id}", response_model=MessageResponse)
async def delete_pdf(
        pdf_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    api_logger.info("Deleting PDF", extra={"pdf_id": pdf_id, "user_id": current_user.id})

    try:
        outcome = document_service.delete(db, current_user, pdf_id)
    except GalleryError as e:
        api_logger.warning("PDF deletion refused", extra={"pdf_id": pdf_id, "reason": e.code})
        raise

    api_logger.info("Successfully deleted PDF", extra={
        "pdf_id": pdf_id,
        "blob_removed": outcome.blob_removed
    })
    return {"message": "PDF deleted successfully"}
