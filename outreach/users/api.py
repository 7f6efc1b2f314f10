from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from outreach.core.database import get_db
from outreach.users.schemas import UserRead
from outreach.users.service import user_service


router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)) -> list[UserRead]:
    return user_service.list_users(db)
