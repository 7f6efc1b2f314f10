from __future__ import annotations

import logging
from dataclasses import dataclass, field

from opentelemetry.trace import Status, StatusCode
from sqlalchemy.orm import Session

from outreach.core import clock
from outreach.hotels.repository import HotelRepository, hotel_repository
from outreach.hotels.schemas import INITIAL_STATUS, HotelImportRequest, HotelImportResult, HotelImportRow
from outreach.metrics import observe_import_row
from outreach.otel import get_tracer


logger = logging.getLogger("outreach.hotels")
tracer = get_tracer("outreach.hotels.import")

OUTCOME_CREATED = "created"
OUTCOME_UPDATED = "updated"


@dataclass(slots=True)
class HotelImportService:
    """Reconciles externally sourced hotel rows against stored hotels.

    Rows are matched on the exact, case-sensitive (hotel name, region) pair.
    A match has its contact details overwritten while status, assignee,
    follow-up date and id are kept; anything else becomes a new hotel in the
    initial status. Each row is committed on its own, so a failure part way
    through keeps the rows already reconciled. Rows repeating a pair earlier
    in the same batch reconcile against the hotel the earlier row produced.
    """

    repository: HotelRepository = field(default_factory=lambda: hotel_repository)

    def import_hotels(self, session: Session, dto: HotelImportRequest) -> HotelImportResult:
        result = HotelImportResult()
        with tracer.start_as_current_span("hotels.import") as span:
            span.set_attribute("import.rows", len(dto.hotels))
            try:
                for row in dto.hotels:
                    outcome = self._reconcile(session, row)
                    if outcome == OUTCOME_CREATED:
                        result.created += 1
                    else:
                        result.updated += 1
                    observe_import_row(outcome)
            except Exception as exc:
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                logger.error(
                    "hotel.import_failed",
                    extra={"created_count": result.created, "updated_count": result.updated, "error": str(exc)},
                )
                raise

            span.set_attribute("import.created", result.created)
            span.set_attribute("import.updated", result.updated)

        logger.info(
            "hotel.imported",
            extra={
                "created_count": result.created,
                "updated_count": result.updated,
                "skipped_count": result.skipped,
            },
        )
        return result

    def _reconcile(self, session: Session, row: HotelImportRow) -> str:
        hotel_name = row.hotel_name or ""
        region = row.region or ""
        contact = {
            "address": row.address,
            "phone": row.phone,
            "email": row.email,
            "website": row.website,
        }
        try:
            existing = self.repository.find_by_name_and_region(session, hotel_name, region)
            if existing is not None:
                self.repository.apply_changes(
                    existing,
                    {"hotel_name": hotel_name, "region": region, **contact},
                    updated_at=clock.next_timestamp(existing.last_updated_at),
                )
                outcome = OUTCOME_UPDATED
            else:
                now = clock.utcnow()
                self.repository.add(
                    session,
                    hotel_name=hotel_name,
                    region=region,
                    status=INITIAL_STATUS,
                    assignee_id=None,
                    next_follow_up_date=None,
                    created_at=now,
                    last_updated_at=now,
                    **contact,
                )
                outcome = OUTCOME_CREATED
            session.commit()
        except Exception:
            session.rollback()
            raise
        return outcome


hotel_import_service = HotelImportService()
