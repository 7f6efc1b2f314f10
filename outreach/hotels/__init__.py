from outreach.hotels.activity import ActivityRecorder, Actor, activity_recorder
from outreach.hotels.api import router
from outreach.hotels.importer import HotelImportService, hotel_import_service
from outreach.hotels.models import Hotel, HotelActivityLog, HotelNote
from outreach.hotels.service import HotelService, hotel_service

__all__ = [
    "router",
    "Hotel",
    "HotelNote",
    "HotelActivityLog",
    "ActivityRecorder",
    "Actor",
    "activity_recorder",
    "HotelService",
    "hotel_service",
    "HotelImportService",
    "hotel_import_service",
]
