from outreach.regions.api import router
from outreach.regions.models import Region
from outreach.regions.service import RegionService, region_service

__all__ = ["router", "Region", "RegionService", "region_service"]
