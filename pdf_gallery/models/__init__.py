# pdf_gallery/models/__init__.py
from ..database import Base
from .user import User
from .pdf import PdfDocument, PdfTag

__all__ = [
    "Base",
    "User",
    "PdfDocument",
    "PdfTag"
]
