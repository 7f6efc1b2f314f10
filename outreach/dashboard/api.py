from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from outreach.core.database import get_db
from outreach.dashboard.schemas import DashboardSummary
from outreach.dashboard.service import dashboard_service
from outreach.hotels.schemas import HotelRead


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def get_summary(db: Session = Depends(get_db)) -> DashboardSummary:
    return dashboard_service.summary(db)


@router.get("/followups", response_model=list[HotelRead])
def get_follow_ups(db: Session = Depends(get_db)) -> list[HotelRead]:
    return dashboard_service.upcoming_follow_ups(db)
