from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from turftrack.extensions import limiter
from turftrack.services import MessageService
from turftrack.services.validators import json_object

api_message_bp = Blueprint("api_message", __name__)


@api_message_bp.get("/conversations")
@login_required
def conversations():
    return jsonify([summary.to_dict() for summary in MessageService.conversations(current_user.id)])


@api_message_bp.get("/unread-count")
@login_required
def unread_count():
    return jsonify({"count": MessageService.unread_count(current_user.id)})


@api_message_bp.get("/<int:listing_id>/<int:other_user_id>")
@login_required
def thread(listing_id, other_user_id):
    messages = MessageService.thread(current_user.id, listing_id, other_user_id)
    return jsonify([msg.to_dict() for msg in messages])


@api_message_bp.post("")
@login_required
@limiter.limit("60 per minute")
def send_message():
    payload = json_object(request.get_json(silent=True))
    message = MessageService.send_message(current_user, payload)
    return jsonify(message.to_dict()), 201


@api_message_bp.post("/<int:listing_id>/<int:sender_id>/read")
@login_required
def mark_read(listing_id, sender_id):
    updated = MessageService.mark_read(current_user.id, listing_id, sender_id)
    return jsonify({"ok": True, "updated": updated})
