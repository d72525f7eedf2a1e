from turftrack.extensions import db
from turftrack.models.base import CreatedAtMixin, PKType


class Message(CreatedAtMixin, db.Model):
    __tablename__ = "messages"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    listing_id = db.Column(
        PKType,
        db.ForeignKey("marketplace_listings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_name = db.Column(db.String(160), nullable=True)
    receiver_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, nullable=False, default=False, index=True)

    listing = db.relationship("MarketplaceListing", back_populates="messages")

    __table_args__ = (
        db.Index("ix_messages_receiver_read", "receiver_id", "is_read"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "listing_id": self.listing_id,
            "sender_id": self.sender_id,
            "sender_name": self.sender_name,
            "receiver_id": self.receiver_id,
            "content": self.content,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
