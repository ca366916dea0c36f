# pdf_gallery/schemas/__init__.py
from .base import MessageResponse
from .pdf import Pdf, PdfList, PdfUpdate
from .user import (
    RegisterRequest, LoginRequest, ChangePasswordRequest,
    User, TokenResponse, ProfileStats, Profile
)

__all__ = [
    "MessageResponse",
    "Pdf", "PdfList", "PdfUpdate",
    "RegisterRequest", "LoginRequest", "ChangePasswordRequest",
    "User", "TokenResponse", "ProfileStats", "Profile"
]
