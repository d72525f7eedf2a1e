from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from flask import current_app
from sqlalchemy import or_

from turftrack.errors import AppError
from turftrack.extensions import db
from turftrack.models import EQUIPMENT_STATUSES, Equipment, MaintenanceLog, MarketplaceListing, Message
from turftrack.services.validators import (
    MAX_HOURS,
    optional_text,
    parse_choice,
    parse_decimal,
    parse_int,
    require_text,
)

MIN_YEAR = 1900
MAX_YEAR = 2100


@dataclass(frozen=True)
class EquipmentQuery:
    search: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_args(cls, args):
        return cls(
            search=(args.get("search") or "").strip() or None,
            status=(args.get("status") or "").strip().lower() or None,
        )

    def criteria(self, owner_id):
        clauses = [Equipment.owner_id == owner_id]
        if self.status:
            clauses.append(Equipment.status == self.status)
        if self.search:
            pattern = f"%{self.search}%"
            clauses.append(
                or_(
                    Equipment.name.ilike(pattern),
                    Equipment.make.ilike(pattern),
                    Equipment.model.ilike(pattern),
                )
            )
        return tuple(clauses)


class EquipmentService:
    UPDATABLE_FIELDS = ("name", "make", "model", "year", "serial_number", "current_hours", "status", "notes")

    @staticmethod
    def _clean_field(field, payload):
        if field in {"name", "make", "model"}:
            return require_text(payload, field, max_length=140 if field == "name" else 80)
        if field == "year":
            return parse_int(payload.get("year"), "year", "Year", minimum=MIN_YEAR, maximum=MAX_YEAR)
        if field == "current_hours":
            return parse_decimal(
                payload.get("current_hours"),
                "current_hours",
                "Current hours",
                minimum=Decimal("0"),
                maximum=MAX_HOURS,
                required=False,
                default=Decimal("0"),
            )
        if field == "status":
            return parse_choice(payload.get("status"), "status", "status", EQUIPMENT_STATUSES, default="active")
        return optional_text(payload, field)

    @staticmethod
    def list_equipment(owner_id, query=None):
        query = query or EquipmentQuery()
        return (
            Equipment.query.filter(*query.criteria(owner_id))
            .order_by(Equipment.created_at.desc(), Equipment.id.desc())
            .all()
        )

    @staticmethod
    def get_equipment(owner_id, equipment_id):
        equipment = Equipment.query.filter_by(id=equipment_id, owner_id=owner_id).first()
        if not equipment:
            raise AppError("Equipment not found.", 404)
        return equipment

    @staticmethod
    def logs_for(equipment):
        return (
            equipment.logs.filter_by(owner_id=equipment.owner_id)
            .order_by(MaintenanceLog.service_date.desc(), MaintenanceLog.id.desc())
            .all()
        )

    @staticmethod
    def create_equipment(owner_id, payload):
        values = {field: EquipmentService._clean_field(field, payload) for field in EquipmentService.UPDATABLE_FIELDS}
        equipment = Equipment(owner_id=owner_id, image_path=optional_text(payload, "image_path"), **values)
        db.session.add(equipment)
        db.session.commit()
        return equipment

    @staticmethod
    def update_equipment(owner_id, equipment_id, payload):
        equipment = EquipmentService.get_equipment(owner_id, equipment_id)
        for field in EquipmentService.UPDATABLE_FIELDS:
            if field in payload:
                setattr(equipment, field, EquipmentService._clean_field(field, payload))
        if "image_path" in payload:
            equipment.image_path = payload.get("image_path")
        db.session.commit()
        return equipment

    @staticmethod
    def delete_equipment(owner_id, equipment_id):
        equipment = EquipmentService.get_equipment(owner_id, equipment_id)
        listing_ids = [
            row.id
            for row in MarketplaceListing.query.filter_by(equipment_id=equipment.id).with_entities(MarketplaceListing.id)
        ]
        if listing_ids:
            Message.query.filter(Message.listing_id.in_(listing_ids)).delete(synchronize_session=False)
            MarketplaceListing.query.filter(MarketplaceListing.id.in_(listing_ids)).delete(synchronize_session=False)
        MaintenanceLog.query.filter_by(equipment_id=equipment.id).delete(synchronize_session=False)
        db.session.delete(equipment)
        db.session.commit()
        current_app.logger.info(
            "Deleted equipment %s for owner %s (%d listings removed)", equipment_id, owner_id, len(listing_ids)
        )
