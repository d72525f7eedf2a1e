"""Plain stand-ins for ORM rows, for the pure marketplace and messaging helpers."""

from types import SimpleNamespace


def make_equipment(name="Mower", make="Toro", model="Reelmaster"):
    return SimpleNamespace(name=name, make=make, model=model)


def make_listing(listing_id, equipment=None, location=None, latitude=None, longitude=None):
    listing = SimpleNamespace(
        id=listing_id,
        equipment=equipment or make_equipment(),
        location=location,
        latitude=latitude,
        longitude=longitude,
    )
    listing.to_dict = lambda: {"id": listing_id}
    return listing


def make_message(msg_id, listing_id, sender_id, receiver_id, sender_name=None, is_read=False):
    message = SimpleNamespace(
        id=msg_id,
        listing_id=listing_id,
        sender_id=sender_id,
        sender_name=sender_name,
        receiver_id=receiver_id,
        is_read=is_read,
    )
    message.to_dict = lambda: {"id": msg_id}
    return message
