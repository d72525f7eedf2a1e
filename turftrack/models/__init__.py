from turftrack.models.equipment import EQUIPMENT_STATUSES, Equipment
from turftrack.models.listing import LISTING_STATUSES, MarketplaceListing
from turftrack.models.maintenance_log import MaintenanceLog
from turftrack.models.message import Message
from turftrack.models.user import User

__all__ = [
    "User",
    "Equipment",
    "MaintenanceLog",
    "MarketplaceListing",
    "Message",
    "EQUIPMENT_STATUSES",
    "LISTING_STATUSES",
]
