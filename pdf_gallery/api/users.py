# pdf_gallery/api/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models import User
from ..schemas.base import MessageResponse
from ..schemas.user import ChangePasswordRequest, Profile
from ..services.users import user_service
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile", response_model=Profile)
async def get_profile(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Current user with totals over their PDFs (storage in MB)"""
    stats = user_service.profile_stats(db, current_user)
    api_logger.info("Profile retrieved", extra={
        "user_id": current_user.id,
        "total_pdfs": stats.total_pdfs
    })
    return {"user": current_user, "stats": stats}


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
        request: ChangePasswordRequest,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    user_service.change_password(db, current_user, request.current_password, request.new_password)
    return {"message": "Password updated successfully"}
