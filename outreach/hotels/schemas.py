from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints, field_validator, model_validator
from pydantic.alias_generators import to_camel

from outreach.core.clock import as_utc


HotelStatus = Literal["NEW", "CALLING", "NO_ANSWER", "NOT_INTERESTED", "INTERESTED", "DEMO_BOOKED", "SIGNED"]
FollowUpWindow = Literal["all", "today", "thisWeek", "overdue"]

HOTEL_STATUSES: tuple[str, ...] = (
    "NEW",
    "CALLING",
    "NO_ANSWER",
    "NOT_INTERESTED",
    "INTERESTED",
    "DEMO_BOOKED",
    "SIGNED",
)
INITIAL_STATUS = "NEW"
INTERESTED_STATUSES = ("INTERESTED", "DEMO_BOOKED")
WON_STATUS = "SIGNED"

# Fields of the hotel record a caller may change; anything else in a body is ignored.
RECORD_FIELDS = (
    "status",
    "assignee",
    "next_follow_up_date",
    "hotel_name",
    "region",
    "address",
    "phone",
    "email",
    "website",
)
BULK_FIELDS = ("status", "assignee", "next_follow_up_date")
NON_NULLABLE_FIELDS = ("status", "hotel_name", "region")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActorFields(CamelModel):
    user_id: OptionalText = None
    user_name: OptionalText = None


class HotelCreate(ActorFields):
    hotel_name: str = ""
    region: str = ""
    address: OptionalText = None
    phone: OptionalText = None
    email: OptionalText = None
    website: OptionalText = None
    status: HotelStatus = INITIAL_STATUS
    assignee: OptionalText = None
    next_follow_up_date: OptionalDate = None

    @field_validator("hotel_name", "region", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return INITIAL_STATUS if value in (None, "") else value


class HotelUpdate(ActorFields):
    """Partial update: only keys present in the request body are applied."""

    status: HotelStatus | None = None
    assignee: OptionalText = None
    next_follow_up_date: OptionalDate = None
    hotel_name: str | None = None
    region: str | None = None
    address: OptionalText = None
    phone: OptionalText = None
    email: OptionalText = None
    website: OptionalText = None

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> HotelUpdate:
        for field_name in NON_NULLABLE_FIELDS:
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{to_camel(field_name)} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(include=set(RECORD_FIELDS), exclude_unset=True)


class HotelBulkChanges(CamelModel):
    status: HotelStatus | None = None
    assignee: OptionalText = None
    next_follow_up_date: OptionalDate = None

    @model_validator(mode="after")
    def _reject_null_status(self) -> HotelBulkChanges:
        if "status" in self.model_fields_set and self.status is None:
            raise ValueError("status cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(include=set(BULK_FIELDS), exclude_unset=True)


class HotelBulkUpdateRequest(CamelModel):
    hotel_ids: list[str] = Field(default_factory=list)
    updates: HotelBulkChanges = Field(default_factory=HotelBulkChanges)


class HotelBulkUpdateResult(CamelModel):
    updated: int


class HotelImportRow(CamelModel):
    hotel_name: OptionalText = None
    region: OptionalText = None
    address: OptionalText = None
    phone: OptionalText = None
    email: OptionalText = None
    website: OptionalText = None


class HotelImportRequest(CamelModel):
    hotels: list[HotelImportRow] = Field(default_factory=list)


class HotelImportResult(CamelModel):
    created: int = 0
    updated: int = 0
    skipped: int = 0


class HotelRead(CamelModel):
    id: str
    hotel_name: str
    region: str
    address: str
    phone: str
    email: str
    website: str
    status: HotelStatus
    assignee: str | None
    next_follow_up_date: date | None
    last_updated_at: datetime
    created_at: datetime

    @field_validator("address", "phone", "email", "website", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("last_updated_at", "created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class HotelPage(CamelModel):
    data: list[HotelRead]
    total_count: int
    page: int
    page_size: int


@dataclass
class HotelListFilters:
    region: str | None = None
    statuses: list[str] = field(default_factory=list)
    assignee: str | None = None
    follow_up_window: str = "all"


class NoteCreate(CamelModel):
    author_name: OptionalText = None
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class NoteRead(CamelModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    hotel_id: str
    author_name: str
    content: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class ActivityRead(CamelModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    hotel_id: str
    user_id: str | None
    user_name: str
    action: str
    old_status: str | None
    new_status: str | None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)
