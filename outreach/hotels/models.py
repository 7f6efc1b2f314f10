from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from outreach.core.clock import utcnow
from outreach.core.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class Hotel(Base):
    __tablename__ = "hotels"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    hotel_name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    region: Mapped[str] = mapped_column(Text, nullable=False, default="")
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="NEW", server_default="NEW")
    assignee_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    next_follow_up_date: Mapped[date | None] = mapped_column(Date(), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    notes: Mapped[list[HotelNote]] = relationship(
        "HotelNote",
        back_populates="hotel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    activity_logs: Mapped[list[HotelActivityLog]] = relationship(
        "HotelActivityLog",
        back_populates="hotel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_hotels_name_region", "hotel_name", "region"),
        Index("ix_hotels_status", "status"),
        Index("ix_hotels_next_follow_up_date", "next_follow_up_date"),
        Index("ix_hotels_last_updated_at", "last_updated_at"),
    )


class HotelNote(Base):
    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    hotel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_name: Mapped[str] = mapped_column(Text, nullable=False, default="System")
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    hotel: Mapped[Hotel] = relationship("Hotel", back_populates="notes")

    __table_args__ = (Index("ix_notes_hotel_created", "hotel_id", "created_at"),)


class HotelActivityLog(Base):
    __tablename__ = "activity_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    hotel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_name: Mapped[str] = mapped_column(Text, nullable=False, default="System")
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    old_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    new_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    hotel: Mapped[Hotel] = relationship("Hotel", back_populates="activity_logs")

    __table_args__ = (Index("ix_activity_logs_hotel_created", "hotel_id", "created_at"),)
