from decimal import Decimal

from flask import current_app
from sqlalchemy.orm import joinedload

from turftrack.errors import AppError
from turftrack.extensions import db
from turftrack.models import LISTING_STATUSES, Equipment, MaintenanceLog, MarketplaceListing, Message
from turftrack.services.geo import parse_coordinate
from turftrack.services.listing_query import ListingQuery
from turftrack.services.validators import MAX_PRICE, optional_text, parse_choice, parse_decimal, parse_int


class MarketplaceService:
    @staticmethod
    def _parse_coordinate(value, key, low, high):
        raw = value.strip() if isinstance(value, str) else value
        if raw is None or raw == "":
            return None
        number = parse_coordinate(raw)
        if number is None or not low <= number <= high:
            raise AppError(f"Invalid {key} value.", 400, field=key)
        return Decimal(str(number))

    @staticmethod
    def browse(query=None):
        query = query or ListingQuery()
        listings = (
            MarketplaceListing.query.options(joinedload(MarketplaceListing.equipment))
            .filter(MarketplaceListing.status == "active")
            .order_by(MarketplaceListing.created_at.desc(), MarketplaceListing.id.desc())
            .all()
        )
        return query.apply(listings)

    @staticmethod
    def get_listing(listing_id):
        listing = (
            MarketplaceListing.query.options(joinedload(MarketplaceListing.equipment)).filter_by(id=listing_id).first()
        )
        if not listing:
            raise AppError("Listing not found.", 404)
        return listing

    @staticmethod
    def public_history(listing):
        return (
            MaintenanceLog.query.filter_by(equipment_id=listing.equipment_id)
            .order_by(MaintenanceLog.service_date.desc(), MaintenanceLog.id.desc())
            .all()
        )

    @staticmethod
    def active_listing_for(equipment_id, exclude_id=None):
        query = MarketplaceListing.query.filter_by(equipment_id=equipment_id, status="active")
        if exclude_id is not None:
            query = query.filter(MarketplaceListing.id != exclude_id)
        return query.first()

    @staticmethod
    def create_listing(seller, payload):
        equipment_id = parse_int(payload.get("equipment_id"), "equipment_id", "Equipment")
        equipment = Equipment.query.filter_by(id=equipment_id, owner_id=seller.id).first()
        if not equipment:
            raise AppError("Equipment not found.", 404)
        if MarketplaceService.active_listing_for(equipment.id):
            raise AppError("This equipment already has an active listing.", 409)

        listing = MarketplaceListing(
            equipment_id=equipment.id,
            seller_id=seller.id,
            seller_name=seller.display_name,
            price=parse_decimal(payload.get("price"), "price", "Price", maximum=MAX_PRICE, positive=True),
            description=optional_text(payload, "description"),
            contact_info=optional_text(payload, "contact_info"),
            location=optional_text(payload, "location"),
            latitude=MarketplaceService._parse_coordinate(payload.get("latitude"), "latitude", -90, 90),
            longitude=MarketplaceService._parse_coordinate(payload.get("longitude"), "longitude", -180, 180),
            status="active",
        )
        db.session.add(listing)
        db.session.commit()
        current_app.logger.info("Listing %s created for equipment %s by seller %s", listing.id, equipment.id, seller.id)
        return listing

    @staticmethod
    def seller_listings(seller_id):
        return (
            MarketplaceListing.query.options(joinedload(MarketplaceListing.equipment))
            .filter_by(seller_id=seller_id)
            .order_by(MarketplaceListing.created_at.desc(), MarketplaceListing.id.desc())
            .all()
        )

    @staticmethod
    def _owned_listing(seller_id, listing_id):
        listing = MarketplaceListing.query.filter_by(id=listing_id, seller_id=seller_id).first()
        if not listing:
            raise AppError("Listing not found.", 404)
        return listing

    @staticmethod
    def update_status(seller_id, listing_id, status):
        listing = MarketplaceService._owned_listing(seller_id, listing_id)
        new_status = parse_choice(status, "status", "listing status", LISTING_STATUSES)
        if new_status == "active" and MarketplaceService.active_listing_for(listing.equipment_id, exclude_id=listing.id):
            raise AppError("This equipment already has an active listing.", 409)
        listing.status = new_status
        db.session.commit()
        return listing

    @staticmethod
    def remove_listing(seller_id, listing_id):
        listing = MarketplaceService._owned_listing(seller_id, listing_id)
        Message.query.filter_by(listing_id=listing.id).delete(synchronize_session=False)
        db.session.delete(listing)
        db.session.commit()
