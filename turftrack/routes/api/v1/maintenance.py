from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from turftrack.services import MaintenanceService
from turftrack.services.validators import json_object

api_maintenance_bp = Blueprint("api_maintenance", __name__)


@api_maintenance_bp.get("")
@login_required
def list_logs():
    equipment_id = request.args.get("equipment_id", type=int)
    logs = MaintenanceService.list_logs(current_user.id, equipment_id=equipment_id)
    return jsonify([log.to_dict() for log in logs])


@api_maintenance_bp.post("")
@login_required
def create_log():
    payload = json_object(request.get_json(silent=True))
    log = MaintenanceService.create_log(current_user.id, payload)
    return jsonify(log.to_dict()), 201


@api_maintenance_bp.delete("/<int:log_id>")
@login_required
def delete_log(log_id):
    MaintenanceService.delete_log(current_user.id, log_id)
    return "", 204
