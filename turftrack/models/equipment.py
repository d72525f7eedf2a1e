from turftrack.extensions import db
from turftrack.models.base import PKType, TimestampMixin

EQUIPMENT_STATUSES = ("active", "maintenance", "retired")


class Equipment(TimestampMixin, db.Model):
    __tablename__ = "equipment"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    owner_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(140), nullable=False)
    make = db.Column(db.String(80), nullable=False)
    model = db.Column(db.String(80), nullable=False)
    year = db.Column(db.Integer, nullable=False)
    serial_number = db.Column(db.String(80), nullable=True)
    current_hours = db.Column(db.Numeric(10, 1), nullable=False, default=0)
    status = db.Column(db.String(24), nullable=False, default="active", index=True)
    notes = db.Column(db.Text, nullable=True)
    image_path = db.Column(db.String(500), nullable=True)

    owner = db.relationship("User", back_populates="equipment")
    logs = db.relationship(
        "MaintenanceLog",
        back_populates="equipment",
        lazy="dynamic",
        passive_deletes=True,
    )
    listings = db.relationship("MarketplaceListing", back_populates="equipment", lazy="dynamic", passive_deletes=True)

    __table_args__ = (
        db.Index("ix_equipment_owner_status", "owner_id", "status"),
        db.CheckConstraint("current_hours >= 0", name="ck_equipment_hours_non_negative"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "serial_number": self.serial_number,
            "current_hours": str(self.current_hours),
            "status": self.status,
            "notes": self.notes,
            "image_path": self.image_path,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
