# pdf_gallery/auth/dependencies.py
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import AuthenticationRequiredError
from ..models import User
from ..repositories import UserRepository
from ..utils.logging import auth_logger
from .security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
        db: Session = Depends(get_db)
) -> User:
    """
    FastAPI dependency resolving the bearer token to a user.

    Raises:
        AuthenticationRequiredError: token missing, invalid, expired, or its user is gone
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationRequiredError("No token, authorization denied")

    user_id = decode_access_token(credentials.credentials)
    user = UserRepository(db).get(user_id)
    if user is None:
        auth_logger.warning("Token refers to an unknown user", extra={"user_id": user_id})
        raise AuthenticationRequiredError("Invalid token")

    request.state.user_id = user.id
    return user
