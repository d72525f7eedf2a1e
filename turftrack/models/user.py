from flask_login import UserMixin

from turftrack.extensions import db
from turftrack.models.base import PKType, TimestampMixin


class User(UserMixin, TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    first_name = db.Column(db.String(80), nullable=True)
    last_name = db.Column(db.String(80), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    is_active_user = db.Column(db.Boolean, nullable=False, default=True)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True)

    equipment = db.relationship("Equipment", back_populates="owner", lazy="dynamic")
    listings = db.relationship("MarketplaceListing", back_populates="seller", lazy="dynamic")

    @property
    def display_name(self):
        name = " ".join(part for part in (self.first_name, self.last_name) if part).strip()
        return name or self.email

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "display_name": self.display_name,
        }
