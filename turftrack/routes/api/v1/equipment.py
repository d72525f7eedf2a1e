from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from turftrack.services import EquipmentQuery, EquipmentService, FileService
from turftrack.services.validators import json_object

api_equipment_bp = Blueprint("api_equipment", __name__)


@api_equipment_bp.get("")
@login_required
def list_equipment():
    items = EquipmentService.list_equipment(current_user.id, EquipmentQuery.from_args(request.args))
    return jsonify([item.to_dict() for item in items])


@api_equipment_bp.get("/<int:equipment_id>")
@login_required
def get_equipment(equipment_id):
    equipment = EquipmentService.get_equipment(current_user.id, equipment_id)
    data = equipment.to_dict()
    data["logs"] = [log.to_dict() for log in EquipmentService.logs_for(equipment)]
    return jsonify(data)


@api_equipment_bp.post("")
@login_required
def create_equipment():
    payload = json_object(request.get_json(silent=True))
    equipment = EquipmentService.create_equipment(current_user.id, payload)
    return jsonify(equipment.to_dict()), 201


@api_equipment_bp.patch("/<int:equipment_id>")
@login_required
def update_equipment(equipment_id):
    payload = json_object(request.get_json(silent=True))
    equipment = EquipmentService.update_equipment(current_user.id, equipment_id, payload)
    return jsonify(equipment.to_dict())


@api_equipment_bp.delete("/<int:equipment_id>")
@login_required
def delete_equipment(equipment_id):
    EquipmentService.delete_equipment(current_user.id, equipment_id)
    return "", 204


@api_equipment_bp.post("/<int:equipment_id>/image")
@login_required
def upload_image(equipment_id):
    EquipmentService.get_equipment(current_user.id, equipment_id)
    image_path = FileService.save_image(request.files.get("image"), current_app.config["UPLOAD_DIR"])
    equipment = EquipmentService.update_equipment(current_user.id, equipment_id, {"image_path": image_path})
    return jsonify(equipment.to_dict())
