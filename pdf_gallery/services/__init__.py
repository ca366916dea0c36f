# pdf_gallery/services/__init__.py
from .cleanup import cleanup_service

__all__ = ["cleanup_service"]
