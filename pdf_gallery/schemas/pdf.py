# pdf_gallery/schemas/pdf.py
from typing import List, Optional, Union

from pydantic import field_validator

from .base import BaseSchema, RequestSchema, TimestampMixin
from ..utils.tags import normalize_tags


class PdfBase(BaseSchema):
    title: str
    description: Optional[str] = None


class Pdf(PdfBase, TimestampMixin):
    id: int
    file_size: int
    tags: List[str] = []
    is_public: bool
    uploaded_by: str


class PdfList(BaseSchema):
    pdfs: List[Pdf] = []


class PdfUpdate(RequestSchema):
    """Fields a caller may change on an existing PDF.

    Anything else in the request body is dropped. Tags may be sent either as
    the comma-separated string the upload form uses or as a list.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[Union[str, List[str]]] = None
    is_public: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("tags")
    @classmethod
    def normalize(cls, value):
        if value is None:
            return value
        return normalize_tags(value)
