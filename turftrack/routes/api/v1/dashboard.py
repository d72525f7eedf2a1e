from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from turftrack.services import DashboardService

api_dashboard_bp = Blueprint("api_dashboard", __name__)


@api_dashboard_bp.get("")
@login_required
def summary():
    return jsonify(DashboardService.summary(current_user.id))
