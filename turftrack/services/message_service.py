from flask import current_app
from sqlalchemy import and_, or_
from sqlalchemy.orm import joinedload

from turftrack.errors import AppError
from turftrack.extensions import db
from turftrack.models import MarketplaceListing, Message
from turftrack.services.conversations import aggregate_conversations
from turftrack.services.validators import parse_int, require_text


class MessageService:
    @staticmethod
    def _between(user_id, other_user_id):
        return or_(
            and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
            and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
        )

    @staticmethod
    def thread(user_id, listing_id, other_user_id):
        """Most recent messages between two users on a listing, oldest first."""
        newest_first = (
            Message.query.filter(Message.listing_id == listing_id)
            .filter(MessageService._between(user_id, other_user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(current_app.config.get("MESSAGE_THREAD_LIMIT", 300))
            .all()
        )
        return list(reversed(newest_first))

    @staticmethod
    def conversations(user_id):
        messages = (
            Message.query.filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .all()
        )
        listing_ids = {msg.listing_id for msg in messages}
        listings = {}
        if listing_ids:
            rows = (
                MarketplaceListing.query.options(joinedload(MarketplaceListing.equipment))
                .filter(MarketplaceListing.id.in_(listing_ids))
                .all()
            )
            listings = {row.id: row for row in rows if row.equipment is not None}
        return aggregate_conversations(messages, user_id, listings)

    @staticmethod
    def send_message(sender, payload):
        listing_id = parse_int(payload.get("listing_id"), "listing_id", "Listing")
        listing = MarketplaceListing.query.filter_by(id=listing_id).first()
        if not listing:
            raise AppError("Listing not found.", 404)

        raw_receiver = payload.get("receiver_id")
        if raw_receiver in (None, ""):
            receiver_id = listing.seller_id
        else:
            receiver_id = parse_int(raw_receiver, "receiver_id", "Receiver")
        if receiver_id == sender.id:
            raise AppError("You cannot message yourself.", 400, field="receiver_id")
        if sender.id != listing.seller_id and receiver_id != listing.seller_id:
            raise AppError("Messages about a listing must involve its seller.", 403)

        message = Message(
            listing_id=listing.id,
            sender_id=sender.id,
            sender_name=sender.display_name,
            receiver_id=receiver_id,
            content=require_text(payload, "content", label="Message", max_length=5000),
            is_read=False,
        )
        db.session.add(message)
        db.session.commit()
        return message

    @staticmethod
    def mark_read(user_id, listing_id, sender_id):
        """Mark everything ``sender_id`` sent to ``user_id`` on a listing as read. Safe to repeat."""
        updated = (
            Message.query.filter_by(listing_id=listing_id, sender_id=sender_id, receiver_id=user_id, is_read=False)
            .update({"is_read": True}, synchronize_session=False)
        )
        db.session.commit()
        return updated

    @staticmethod
    def unread_count(user_id):
        return Message.query.filter_by(receiver_id=user_id, is_read=False).count()
