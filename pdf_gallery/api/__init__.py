# pdf_gallery/api/__init__.py
from .auth import router as auth_router
from .pdfs import router as pdfs_router
from .users import router as users_router

__all__ = ["auth_router", "pdfs_router", "users_router"]
