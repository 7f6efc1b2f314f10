from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from outreach.core import clock
from outreach.hotels.models import HotelActivityLog
from outreach.metrics import observe_status_transition


logger = logging.getLogger("outreach.hotels")

DEFAULT_ACTOR_NAME = "System"
ACTION_CREATED = "created"
ACTION_STATUS_CHANGED = "status_changed"


@dataclass(frozen=True, slots=True)
class Actor:
    user_id: str | None = None
    user_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.user_name or DEFAULT_ACTOR_NAME


class ActivityRecorder:
    """Appends immutable activity rows.

    Rows are added to the caller's session and committed together with the
    change they describe.
    """

    def record(
        self,
        session: Session,
        *,
        hotel_id: str,
        actor: Actor,
        action: str,
        old_status: str | None = None,
        new_status: str | None = None,
    ) -> HotelActivityLog:
        entry = HotelActivityLog(
            hotel_id=hotel_id,
            user_id=actor.user_id,
            user_name=actor.display_name,
            action=action,
            old_status=old_status,
            new_status=new_status,
            created_at=clock.utcnow(),
        )
        session.add(entry)
        return entry

    def record_created(self, session: Session, *, hotel_id: str, actor: Actor) -> HotelActivityLog:
        return self.record(session, hotel_id=hotel_id, actor=actor, action=ACTION_CREATED)

    def record_status_change(
        self,
        session: Session,
        *,
        hotel_id: str,
        actor: Actor,
        old_status: str,
        new_status: str,
    ) -> HotelActivityLog:
        entry = self.record(
            session,
            hotel_id=hotel_id,
            actor=actor,
            action=ACTION_STATUS_CHANGED,
            old_status=old_status,
            new_status=new_status,
        )
        observe_status_transition(old_status, new_status)
        logger.info(
            "hotel.status_changed",
            extra={"hotel_id": hotel_id, "old_status": old_status, "new_status": new_status},
        )
        return entry

    def list_for_hotel(self, session: Session, hotel_id: str) -> list[HotelActivityLog]:
        stmt = (
            select(HotelActivityLog)
            .where(HotelActivityLog.hotel_id == hotel_id)
            .order_by(HotelActivityLog.created_at.desc(), HotelActivityLog.id.desc())
        )
        return list(session.scalars(stmt).all())


activity_recorder = ActivityRecorder()
