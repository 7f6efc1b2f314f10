from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from outreach.core.auth import AuthUser, get_current_user
from outreach.core.config import get_settings
from outreach.core.database import get_db
from outreach.errors import InvalidRequestError
from outreach.hotels.importer import hotel_import_service
from outreach.hotels.schemas import (
    ActivityRead,
    FollowUpWindow,
    HotelBulkUpdateRequest,
    HotelBulkUpdateResult,
    HotelCreate,
    HotelImportRequest,
    HotelImportResult,
    HotelListFilters,
    HotelPage,
    HotelRead,
    HotelStatus,
    HotelUpdate,
    NoteCreate,
    NoteRead,
)
from outreach.hotels.service import hotel_service


router = APIRouter(prefix="/api/hotels", tags=["hotels"])


@router.get("", response_model=HotelPage)
def list_hotels(
    region: str | None = Query(default=None),
    status_filter: list[HotelStatus] | None = Query(default=None, alias="status"),
    assignee: str | None = Query(default=None),
    follow_up_filter: FollowUpWindow = Query(default="all", alias="followUpFilter"),
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1, alias="pageSize"),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
) -> HotelPage:
    settings = get_settings()
    resolved_page_size = page_size or settings.default_page_size
    if resolved_page_size > settings.max_page_size:
        raise InvalidRequestError(f"pageSize must be at most {settings.max_page_size}")

    filters = HotelListFilters(
        region=region or None,
        statuses=list(status_filter or []),
        assignee=assignee or None,
        follow_up_window=follow_up_filter,
    )
    return hotel_service.list_hotels(
        db,
        filters,
        page=page,
        page_size=resolved_page_size,
        current_user_id=None if user.is_anonymous else user.sub,
    )


@router.post("", response_model=HotelRead, status_code=status.HTTP_201_CREATED)
def create_hotel(dto: HotelCreate, db: Session = Depends(get_db)) -> HotelRead:
    return hotel_service.create_hotel(db, dto)


@router.post("/bulk", response_model=HotelBulkUpdateResult)
def bulk_update_hotels(dto: HotelBulkUpdateRequest, db: Session = Depends(get_db)) -> HotelBulkUpdateResult:
    return hotel_service.bulk_update(db, dto)


@router.post("/import", response_model=HotelImportResult)
def import_hotels(dto: HotelImportRequest, db: Session = Depends(get_db)) -> HotelImportResult:
    return hotel_import_service.import_hotels(db, dto)


@router.get("/{hotel_id}", response_model=HotelRead)
def get_hotel(hotel_id: str, db: Session = Depends(get_db)) -> HotelRead:
    return hotel_service.get_hotel(db, hotel_id)


@router.patch("/{hotel_id}", response_model=HotelRead)
def update_hotel(hotel_id: str, dto: HotelUpdate, db: Session = Depends(get_db)) -> HotelRead:
    return hotel_service.update_hotel(db, hotel_id, dto)


@router.get("/{hotel_id}/notes", response_model=list[NoteRead])
def list_notes(hotel_id: str, db: Session = Depends(get_db)) -> list[NoteRead]:
    return hotel_service.list_notes(db, hotel_id)


@router.post("/{hotel_id}/notes", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
def create_note(hotel_id: str, dto: NoteCreate, db: Session = Depends(get_db)) -> NoteRead:
    return hotel_service.add_note(db, hotel_id, dto)


@router.get("/{hotel_id}/activity", response_model=list[ActivityRead])
def list_activity(hotel_id: str, db: Session = Depends(get_db)) -> list[ActivityRead]:
    return hotel_service.list_activity(db, hotel_id)
