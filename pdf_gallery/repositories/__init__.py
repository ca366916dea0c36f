# pdf_gallery/repositories/__init__.py
from .pdf_repository import PdfRepository
from .user_repository import UserRepository

__all__ = ["PdfRepository", "UserRepository"]
