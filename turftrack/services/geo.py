import math

EARTH_RADIUS_MILES = 3959


def haversine_miles(lat1, lon1, lat2, lon2):
    """Great-circle distance between two points in degrees, rounded to whole miles."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for antipodal points.
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    # Half-up rounding, not banker's rounding.
    return int(math.floor(EARTH_RADIUS_MILES * c + 0.5))


def parse_coordinate(value):
    """Return ``value`` as a finite float, or None when it is missing or malformed."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
