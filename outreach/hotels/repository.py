from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import Any

from sqlalchemy import ColumnElement, Select, func, select, update
from sqlalchemy.orm import Session

from outreach.hotels.models import Hotel, HotelNote
from outreach.hotels.schemas import HotelListFilters


# Request field -> column name on the hotels table.
COLUMN_FOR_FIELD = {
    "status": "status",
    "assignee": "assignee_id",
    "next_follow_up_date": "next_follow_up_date",
    "hotel_name": "hotel_name",
    "region": "region",
    "address": "address",
    "phone": "phone",
    "email": "email",
    "website": "website",
}


def week_bounds(day: date) -> tuple[date, date]:
    """Sunday..Saturday calendar week containing ``day``, both ends inclusive."""
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def follow_up_condition(window: str, today: date) -> ColumnElement[bool] | None:
    column = Hotel.next_follow_up_date
    if window == "today":
        return column == today
    if window == "thisWeek":
        start, end = week_bounds(today)
        return column.between(start, end)
    if window == "overdue":
        return column < today
    return None


class HotelRepository:
    def build_conditions(
        self,
        filters: HotelListFilters,
        *,
        today: date,
        current_user_id: str | None = None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if filters.region:
            conditions.append(Hotel.region == filters.region)
        if filters.statuses:
            conditions.append(Hotel.status.in_(filters.statuses))
        if filters.assignee and filters.assignee != "all":
            if filters.assignee == "me":
                if current_user_id:
                    conditions.append(Hotel.assignee_id == current_user_id)
                else:
                    conditions.append(Hotel.assignee_id.is_not(None))
            else:
                conditions.append(Hotel.assignee_id == filters.assignee)
        window_condition = follow_up_condition(filters.follow_up_window, today)
        if window_condition is not None:
            conditions.append(window_condition)
        return conditions

    def count(self, session: Session, conditions: Sequence[ColumnElement[bool]]) -> int:
        stmt = select(func.count()).select_from(Hotel).where(*conditions)
        return int(session.scalar(stmt) or 0)

    def page(
        self,
        session: Session,
        conditions: Sequence[ColumnElement[bool]],
        *,
        offset: int,
        limit: int,
    ) -> list[Hotel]:
        stmt: Select[tuple[Hotel]] = (
            select(Hotel)
            .where(*conditions)
            .order_by(Hotel.last_updated_at.desc(), Hotel.id.asc())
            .offset(offset)
            .limit(limit)
        )
        return list(session.scalars(stmt).all())

    def get(self, session: Session, hotel_id: str) -> Hotel | None:
        return session.get(Hotel, hotel_id)

    def exists(self, session: Session, hotel_id: str) -> bool:
        return session.scalar(select(Hotel.id).where(Hotel.id == hotel_id)) is not None

    def find_by_name_and_region(self, session: Session, hotel_name: str, region: str) -> Hotel | None:
        stmt = (
            select(Hotel)
            .where(Hotel.hotel_name == hotel_name, Hotel.region == region)
            .order_by(Hotel.created_at.asc(), Hotel.id.asc())
            .limit(1)
        )
        return session.scalar(stmt)

    def add(self, session: Session, **values: Any) -> Hotel:
        hotel = Hotel(**values)
        session.add(hotel)
        session.flush()
        return hotel

    def apply_changes(self, hotel: Hotel, changes: dict[str, Any], *, updated_at: datetime) -> None:
        for field_name, value in changes.items():
            setattr(hotel, COLUMN_FOR_FIELD[field_name], value)
        hotel.last_updated_at = updated_at

    def bulk_update(
        self,
        session: Session,
        hotel_ids: Sequence[str],
        changes: dict[str, Any],
        *,
        updated_at: datetime,
    ) -> int:
        values = {COLUMN_FOR_FIELD[field_name]: value for field_name, value in changes.items()}
        values["last_updated_at"] = updated_at
        result = session.execute(
            update(Hotel)
            .where(Hotel.id.in_(list(hotel_ids)))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def scan_status_and_region(self, session: Session) -> list[tuple[str, str]]:
        rows = session.execute(select(Hotel.status, Hotel.region)).all()
        return [(row.status, row.region) for row in rows]

    def due_follow_ups(self, session: Session, today: date) -> list[Hotel]:
        stmt = (
            select(Hotel)
            .where(Hotel.next_follow_up_date.is_not(None), Hotel.next_follow_up_date <= today)
            .order_by(Hotel.next_follow_up_date.asc(), Hotel.id.asc())
        )
        return list(session.scalars(stmt).all())

    def distinct_regions(self, session: Session) -> list[str]:
        stmt = select(Hotel.region).where(Hotel.region.is_not(None)).distinct()
        return [value for value in session.scalars(stmt).all()]

    def count_in_region(self, session: Session, region: str) -> int:
        return self.count(session, [Hotel.region == region])

    def rename_region(self, session: Session, old_name: str, new_name: str, *, updated_at: datetime) -> int:
        result = session.execute(
            update(Hotel)
            .where(Hotel.region == old_name)
            .values(region=new_name, last_updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)


class NoteRepository:
    def list_for_hotel(self, session: Session, hotel_id: str) -> list[HotelNote]:
        stmt = (
            select(HotelNote)
            .where(HotelNote.hotel_id == hotel_id)
            .order_by(HotelNote.created_at.desc(), HotelNote.id.desc())
        )
        return list(session.scalars(stmt).all())

    def add(self, session: Session, *, hotel_id: str, author_name: str, content: str, created_at: datetime) -> HotelNote:
        note = HotelNote(hotel_id=hotel_id, author_name=author_name, content=content, created_at=created_at)
        session.add(note)
        session.flush()
        return note


hotel_repository = HotelRepository()
note_repository = NoteRepository()
