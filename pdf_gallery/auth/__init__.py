# pdf_gallery/auth/__init__.py
from .security import hash_password, verify_password, create_access_token, decode_access_token
from .dependencies import get_current_user

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
    "get_current_user"
]
