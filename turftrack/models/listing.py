from turftrack.extensions import db
from turftrack.models.base import CreatedAtMixin, PKType

LISTING_STATUSES = ("active", "sold", "removed")


class MarketplaceListing(CreatedAtMixin, db.Model):
    __tablename__ = "marketplace_listings"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    equipment_id = db.Column(PKType, db.ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False, index=True)
    seller_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    seller_name = db.Column(db.String(160), nullable=True)
    price = db.Column(db.Numeric(12, 2), nullable=False)
    description = db.Column(db.Text, nullable=True)
    contact_info = db.Column(db.String(255), nullable=True)
    location = db.Column(db.String(255), nullable=True)
    latitude = db.Column(db.Numeric(10, 7), nullable=True)
    longitude = db.Column(db.Numeric(10, 7), nullable=True)
    status = db.Column(db.String(24), nullable=False, default="active", index=True)

    equipment = db.relationship("Equipment", back_populates="listings")
    seller = db.relationship("User", back_populates="listings")
    messages = db.relationship("Message", back_populates="listing", lazy="dynamic", passive_deletes=True)

    __table_args__ = (
        db.Index("ix_marketplace_listings_equipment_status", "equipment_id", "status"),
        db.CheckConstraint("price > 0", name="ck_listing_price_positive"),
    )

    def to_dict(self, include_equipment=True):
        data = {
            "id": self.id,
            "equipment_id": self.equipment_id,
            "seller_id": self.seller_id,
            "seller_name": self.seller_name,
            "price": str(self.price),
            "description": self.description,
            "contact_info": self.contact_info,
            "location": self.location,
            "latitude": float(self.latitude) if self.latitude is not None else None,
            "longitude": float(self.longitude) if self.longitude is not None else None,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_equipment and self.equipment is not None:
            data["equipment"] = self.equipment.to_dict()
        return data
