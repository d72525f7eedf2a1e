from turftrack.services.auth_service import AuthService
from turftrack.services.dashboard_service import DashboardService
from turftrack.services.equipment_service import EquipmentQuery, EquipmentService
from turftrack.services.file_service import FileService
from turftrack.services.listing_query import ListingQuery, RankedListing
from turftrack.services.maintenance_service import MaintenanceService
from turftrack.services.marketplace_service import MarketplaceService
from turftrack.services.message_service import MessageService

__all__ = [
    "AuthService",
    "DashboardService",
    "EquipmentQuery",
    "EquipmentService",
    "FileService",
    "ListingQuery",
    "RankedListing",
    "MaintenanceService",
    "MarketplaceService",
    "MessageService",
]
