from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from turftrack.services import ListingQuery, MarketplaceService
from turftrack.services.validators import json_object

api_marketplace_bp = Blueprint("api_marketplace", __name__)


@api_marketplace_bp.get("")
@login_required
def browse_listings():
    query = ListingQuery.from_args(request.args)
    ranked = MarketplaceService.browse(query)
    return jsonify([item.to_dict() for item in ranked])


@api_marketplace_bp.get("/distance-options")
def distance_options():
    return jsonify(list(current_app.config["MARKETPLACE_DISTANCE_OPTIONS"]))


@api_marketplace_bp.get("/mine")
@login_required
def my_listings():
    return jsonify([listing.to_dict() for listing in MarketplaceService.seller_listings(current_user.id)])


@api_marketplace_bp.get("/<int:listing_id>")
@login_required
def get_listing(listing_id):
    listing = MarketplaceService.get_listing(listing_id)
    data = listing.to_dict()
    data["maintenance_logs"] = [log.to_dict() for log in MarketplaceService.public_history(listing)]
    return jsonify(data)


@api_marketplace_bp.post("")
@login_required
def create_listing():
    payload = json_object(request.get_json(silent=True))
    listing = MarketplaceService.create_listing(current_user, payload)
    return jsonify(listing.to_dict()), 201


@api_marketplace_bp.patch("/<int:listing_id>/status")
@login_required
def update_status(listing_id):
    payload = json_object(request.get_json(silent=True))
    listing = MarketplaceService.update_status(current_user.id, listing_id, payload.get("status"))
    return jsonify(listing.to_dict())


@api_marketplace_bp.delete("/<int:listing_id>")
@login_required
def remove_listing(listing_id):
    MarketplaceService.remove_listing(current_user.id, listing_id)
    return "", 204
