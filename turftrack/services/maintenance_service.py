from decimal import Decimal

from flask import current_app

from turftrack.errors import AppError
from turftrack.extensions import db
from turftrack.models import Equipment, MaintenanceLog
from turftrack.services.validators import (
    MAX_COST,
    MAX_HOURS,
    optional_text,
    parse_date,
    parse_decimal,
    parse_int,
    require_text,
)


class MaintenanceService:
    @staticmethod
    def list_logs(owner_id, equipment_id=None):
        query = MaintenanceLog.query.filter_by(owner_id=owner_id)
        if equipment_id is not None:
            query = query.filter_by(equipment_id=equipment_id)
        return query.order_by(MaintenanceLog.service_date.desc(), MaintenanceLog.id.desc()).all()

    @staticmethod
    def create_log(owner_id, payload):
        equipment_id = parse_int(payload.get("equipment_id"), "equipment_id", "Equipment")
        equipment = Equipment.query.filter_by(id=equipment_id, owner_id=owner_id).first()
        if not equipment:
            raise AppError("Equipment not found.", 404)

        log = MaintenanceLog(
            owner_id=owner_id,
            equipment_id=equipment.id,
            service_date=parse_date(payload.get("service_date"), "service_date", "Service date"),
            type=require_text(payload, "type", label="Service type", max_length=60),
            description=require_text(payload, "description"),
            cost=parse_decimal(
                payload.get("cost"),
                "cost",
                "Cost",
                minimum=Decimal("0"),
                maximum=MAX_COST,
                required=False,
                default=Decimal("0"),
            ),
            hours_at_service=parse_decimal(
                payload.get("hours_at_service"),
                "hours_at_service",
                "Hours at service",
                minimum=Decimal("0"),
                maximum=MAX_HOURS,
                required=False,
            ),
            performed_by=optional_text(payload, "performed_by"),
        )
        db.session.add(log)
        db.session.commit()

        # Second, independent write; a failure here leaves the log in place.
        MaintenanceService.apply_hours_reading(equipment, log.hours_at_service)
        return log

    @staticmethod
    def apply_hours_reading(equipment, hours_at_service):
        """Raise ``equipment.current_hours`` to ``hours_at_service`` when it is higher.

        Returns True when the equipment row was updated. Hours never go down here.
        """
        if hours_at_service is None:
            return False
        reading = Decimal(str(hours_at_service))
        current = Decimal(str(equipment.current_hours or 0))
        if reading <= current:
            return False
        equipment.current_hours = reading
        db.session.commit()
        current_app.logger.info("Equipment %s hours updated %s -> %s", equipment.id, current, reading)
        return True

    @staticmethod
    def delete_log(owner_id, log_id):
        log = MaintenanceLog.query.filter_by(id=log_id, owner_id=owner_id).first()
        if not log:
            raise AppError("Maintenance log not found.", 404)
        db.session.delete(log)
        db.session.commit()
