"""Marketplace browse filtering.

A :class:`ListingQuery` is a value object describing one browse request. It is
applied to listings that were already loaded newest first, and yields them
annotated with their distance from the caller.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from turftrack.services.geo import haversine_miles, parse_coordinate


def _bounded(value, limit):
    number = parse_coordinate(value)
    if number is None or abs(number) > limit:
        return None
    return number


@dataclass(frozen=True)
class RankedListing:
    listing: Any
    distance: Optional[int] = None

    def to_dict(self):
        data = self.listing.to_dict()
        data["distance"] = self.distance
        return data


@dataclass(frozen=True)
class ListingQuery:
    search: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    max_distance: Optional[float] = None

    @classmethod
    def from_args(cls, args):
        search = (args.get("search") or "").strip() or None
        max_distance = parse_coordinate(args.get("distance"))
        if max_distance is not None and max_distance <= 0:
            max_distance = None
        return cls(
            search=search,
            latitude=_bounded(args.get("lat"), 90),
            longitude=_bounded(args.get("lng"), 180),
            max_distance=max_distance,
        )

    @property
    def has_origin(self):
        return self.latitude is not None and self.longitude is not None

    @property
    def filters_by_radius(self):
        return self.has_origin and self.max_distance is not None

    def matches(self, listing):
        if not self.search:
            return True
        needle = self.search.lower()
        equipment = listing.equipment
        fields = (
            getattr(equipment, "name", None),
            getattr(equipment, "make", None),
            getattr(equipment, "model", None),
            listing.location,
        )
        return any(needle in field.lower() for field in fields if field)

    def distance_to(self, listing):
        if not self.has_origin:
            return None
        lat = parse_coordinate(listing.latitude)
        lng = parse_coordinate(listing.longitude)
        if lat is None or lng is None:
            return None
        return haversine_miles(self.latitude, self.longitude, lat, lng)

    def apply(self, listings: Iterable[Any]) -> List[RankedListing]:
        ranked = [
            RankedListing(listing=listing, distance=self.distance_to(listing))
            for listing in listings
            if self.matches(listing)
        ]
        if not self.filters_by_radius:
            return ranked

        # Listings without coordinates are kept under any radius.
        ranked = [item for item in ranked if item.distance is None or item.distance <= self.max_distance]
        ranked.sort(key=lambda item: (item.distance is None, item.distance or 0))
        return ranked
