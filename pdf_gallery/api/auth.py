# pdf_gallery/api/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models import User
from ..schemas.user import LoginRequest, RegisterRequest, TokenResponse, User as UserSchema
from ..services.users import user_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account.

    Returns a bearer token for the new user together with the user record.
    Username and email must both be unused (400 otherwise).
    """
    user, token = user_service.register_user(db, request.username, request.email, request.password)
    return {"token": token, "user": user}


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate with username or email plus password.

    Raises 401 on unknown user or wrong password.
    """
    user, token = user_service.login_user(
        db,
        request.password,
        username=request.username,
        email=request.email,
    )
    return {"token": token, "user": user}


@router.get("/me", response_model=UserSchema)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
