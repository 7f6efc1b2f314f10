from outreach.dashboard.api import router
from outreach.dashboard.schemas import DashboardSummary
from outreach.dashboard.service import DashboardService, dashboard_service

__all__ = ["router", "DashboardSummary", "DashboardService", "dashboard_service"]
