from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from outreach.core import clock
from outreach.dashboard.schemas import DashboardSummary
from outreach.hotels.repository import HotelRepository, hotel_repository
from outreach.hotels.schemas import HOTEL_STATUSES, INITIAL_STATUS, INTERESTED_STATUSES, WON_STATUS, HotelRead
from outreach.hotels.service import to_hotel_read
from outreach.otel import get_tracer


tracer = get_tracer("outreach.dashboard")

UNKNOWN_REGION = "Unknown"


@dataclass(slots=True)
class DashboardService:
    repository: HotelRepository = field(default_factory=lambda: hotel_repository)

    def summary(self, session: Session) -> DashboardSummary:
        """Status totals and the region x status matrix from one scan of all hotels."""
        with tracer.start_as_current_span("dashboard.summary") as span:
            rows = self.repository.scan_status_and_region(session)
            distribution = {status: 0 for status in HOTEL_STATUSES}
            matrix: dict[str, dict[str, int]] = {}
            for status, region in rows:
                distribution[status] = distribution.get(status, 0) + 1
                by_status = matrix.setdefault(region or UNKNOWN_REGION, dict.fromkeys(HOTEL_STATUSES, 0))
                by_status[status] = by_status.get(status, 0) + 1
            span.set_attribute("dashboard.hotels", len(rows))

        return DashboardSummary(
            total_hotels=len(rows),
            new_hotels=distribution[INITIAL_STATUS],
            interested_hotels=sum(distribution[status] for status in INTERESTED_STATUSES),
            signed_hotels=distribution[WON_STATUS],
            status_distribution=distribution,
            region_status_matrix=matrix,
        )

    def upcoming_follow_ups(self, session: Session) -> list[HotelRead]:
        return [to_hotel_read(hotel) for hotel in self.repository.due_follow_ups(session, clock.today())]


dashboard_service = DashboardService()
