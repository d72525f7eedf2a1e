from turftrack.extensions import db
from turftrack.models.base import CreatedAtMixin, PKType


class MaintenanceLog(CreatedAtMixin, db.Model):
    __tablename__ = "maintenance_logs"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    owner_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    equipment_id = db.Column(PKType, db.ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False, index=True)
    service_date = db.Column(db.Date, nullable=False, index=True)
    type = db.Column(db.String(60), nullable=False)
    description = db.Column(db.Text, nullable=False)
    cost = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    hours_at_service = db.Column(db.Numeric(10, 1), nullable=True)
    performed_by = db.Column(db.String(120), nullable=True)

    equipment = db.relationship("Equipment", back_populates="logs")

    __table_args__ = (
        db.Index("ix_maintenance_logs_owner_equipment", "owner_id", "equipment_id"),
        db.CheckConstraint("cost >= 0", name="ck_maintenance_cost_non_negative"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "equipment_id": self.equipment_id,
            "service_date": self.service_date.isoformat(),
            "type": self.type,
            "description": self.description,
            "cost": str(self.cost),
            "hours_at_service": str(self.hours_at_service) if self.hours_at_service is not None else None,
            "performed_by": self.performed_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
