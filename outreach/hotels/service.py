from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from outreach.core import clock
from outreach.errors import InvalidRequestError, NotFoundError
from outreach.hotels.activity import ActivityRecorder, Actor, activity_recorder
from outreach.hotels.models import Hotel
from outreach.hotels.repository import HotelRepository, NoteRepository, hotel_repository, note_repository
from outreach.hotels.schemas import (
    ActivityRead,
    HotelBulkUpdateRequest,
    HotelBulkUpdateResult,
    HotelCreate,
    HotelListFilters,
    HotelPage,
    HotelRead,
    HotelUpdate,
    NoteCreate,
    NoteRead,
)
from outreach.metrics import observe_bulk_update


logger = logging.getLogger("outreach.hotels")


def to_hotel_read(hotel: Hotel) -> HotelRead:
    return HotelRead(
        id=hotel.id,
        hotel_name=hotel.hotel_name,
        region=hotel.region,
        address=hotel.address,
        phone=hotel.phone,
        email=hotel.email,
        website=hotel.website,
        status=hotel.status,
        assignee=hotel.assignee_id,
        next_follow_up_date=hotel.next_follow_up_date,
        last_updated_at=hotel.last_updated_at,
        created_at=hotel.created_at,
    )


@dataclass(slots=True)
class HotelService:
    repository: HotelRepository = field(default_factory=lambda: hotel_repository)
    notes: NoteRepository = field(default_factory=lambda: note_repository)
    recorder: ActivityRecorder = field(default_factory=lambda: activity_recorder)

    def list_hotels(
        self,
        session: Session,
        filters: HotelListFilters,
        *,
        page: int,
        page_size: int,
        current_user_id: str | None = None,
    ) -> HotelPage:
        conditions = self.repository.build_conditions(filters, today=clock.today(), current_user_id=current_user_id)
        total_count = self.repository.count(session, conditions)
        rows = self.repository.page(session, conditions, offset=(page - 1) * page_size, limit=page_size)
        return HotelPage(
            data=[to_hotel_read(row) for row in rows],
            total_count=total_count,
            page=page,
            page_size=page_size,
        )

    def get_hotel(self, session: Session, hotel_id: str) -> HotelRead:
        return to_hotel_read(self._load(session, hotel_id))

    def create_hotel(self, session: Session, dto: HotelCreate) -> HotelRead:
        now = clock.utcnow()
        actor = Actor(user_id=dto.user_id, user_name=dto.user_name)
        try:
            hotel = self.repository.add(
                session,
                hotel_name=dto.hotel_name,
                region=dto.region,
                address=dto.address,
                phone=dto.phone,
                email=dto.email,
                website=dto.website,
                status=dto.status,
                assignee_id=dto.assignee,
                next_follow_up_date=dto.next_follow_up_date,
                created_at=now,
                last_updated_at=now,
            )
            self.recorder.record_created(session, hotel_id=hotel.id, actor=actor)
            session.commit()
        except Exception:
            session.rollback()
            raise

        logger.info("hotel.created", extra={"hotel_id": hotel.id, "region": hotel.region})
        session.refresh(hotel)
        return to_hotel_read(hotel)

    def update_hotel(self, session: Session, hotel_id: str, dto: HotelUpdate) -> HotelRead:
        hotel = self._load(session, hotel_id)
        changes = dto.changes()
        if not changes:
            raise InvalidRequestError("No updates provided")

        old_status = hotel.status
        actor = Actor(user_id=dto.user_id, user_name=dto.user_name)
        try:
            self.repository.apply_changes(hotel, changes, updated_at=clock.next_timestamp(hotel.last_updated_at))
            new_status = changes.get("status")
            if new_status is not None and new_status != old_status:
                self.recorder.record_status_change(
                    session,
                    hotel_id=hotel.id,
                    actor=actor,
                    old_status=old_status,
                    new_status=new_status,
                )
            session.commit()
        except Exception:
            session.rollback()
            raise

        session.refresh(hotel)
        return to_hotel_read(hotel)

    def bulk_update(self, session: Session, dto: HotelBulkUpdateRequest) -> HotelBulkUpdateResult:
        if not dto.hotel_ids:
            raise InvalidRequestError("hotelIds array is required")
        changes = dto.updates.changes()
        if not changes:
            raise InvalidRequestError("No updates provided")

        try:
            updated = self.repository.bulk_update(session, dto.hotel_ids, changes, updated_at=clock.utcnow())
            session.commit()
        except Exception:
            session.rollback()
            raise

        observe_bulk_update(updated)
        logger.info("hotel.bulk_updated", extra={"count": updated, "action": ",".join(sorted(changes))})
        return HotelBulkUpdateResult(updated=updated)

    def list_notes(self, session: Session, hotel_id: str) -> list[NoteRead]:
        self._ensure_exists(session, hotel_id)
        return [NoteRead.model_validate(note) for note in self.notes.list_for_hotel(session, hotel_id)]

    def add_note(self, session: Session, hotel_id: str, dto: NoteCreate) -> NoteRead:
        self._ensure_exists(session, hotel_id)
        try:
            note = self.notes.add(
                session,
                hotel_id=hotel_id,
                author_name=dto.author_name or "System",
                content=dto.content,
                created_at=clock.utcnow(),
            )
            session.commit()
        except Exception:
            session.rollback()
            raise
        session.refresh(note)
        return NoteRead.model_validate(note)

    def list_activity(self, session: Session, hotel_id: str) -> list[ActivityRead]:
        self._ensure_exists(session, hotel_id)
        return [ActivityRead.model_validate(entry) for entry in self.recorder.list_for_hotel(session, hotel_id)]

    def _load(self, session: Session, hotel_id: str) -> Hotel:
        hotel = self.repository.get(session, hotel_id)
        if hotel is None:
            raise NotFoundError("Hotel not found")
        return hotel

    def _ensure_exists(self, session: Session, hotel_id: str) -> None:
        if not self.repository.exists(session, hotel_id):
            raise NotFoundError("Hotel not found")


hotel_service = HotelService()
