from __future__ import annotations

from pydantic import Field

from outreach.hotels.schemas import CamelModel


class DashboardSummary(CamelModel):
    total_hotels: int = 0
    new_hotels: int = 0
    interested_hotels: int = 0
    signed_hotels: int = 0
    status_distribution: dict[str, int] = Field(default_factory=dict)
    # region -> status -> count, every status present; blank regions fall under "Unknown".
    region_status_matrix: dict[str, dict[str, int]] = Field(default_factory=dict)
