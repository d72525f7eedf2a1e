from flask import Blueprint

from turftrack.extensions import cache, csrf
from turftrack.routes.api.v1.auth import api_auth_bp
from turftrack.routes.api.v1.dashboard import api_dashboard_bp
from turftrack.routes.api.v1.equipment import api_equipment_bp
from turftrack.routes.api.v1.maintenance import api_maintenance_bp
from turftrack.routes.api.v1.marketplace import api_marketplace_bp
from turftrack.routes.api.v1.messages import api_message_bp
from turftrack.services import DashboardService

api_v1_bp = Blueprint("api_v1", __name__)
api_v1_bp.register_blueprint(api_auth_bp, url_prefix="/auth")
api_v1_bp.register_blueprint(api_equipment_bp, url_prefix="/equipment")
api_v1_bp.register_blueprint(api_maintenance_bp, url_prefix="/maintenance")
api_v1_bp.register_blueprint(api_marketplace_bp, url_prefix="/marketplace")
api_v1_bp.register_blueprint(api_message_bp, url_prefix="/messages")
api_v1_bp.register_blueprint(api_dashboard_bp, url_prefix="/dashboard")

csrf.exempt(api_v1_bp)
for child_bp in (
    api_auth_bp,
    api_equipment_bp,
    api_maintenance_bp,
    api_marketplace_bp,
    api_message_bp,
    api_dashboard_bp,
):
    csrf.exempt(child_bp)


@api_v1_bp.get("/stats")
@cache.cached(timeout=120)
def platform_stats():
    return DashboardService.platform_stats()
