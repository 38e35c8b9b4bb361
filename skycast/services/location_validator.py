import math
from collections import namedtuple
from skycast.errors import InvalidLocationShape, LocationLimitExceeded
from skycast.models.location import ZIP_MAX_LENGTH

MAX_LOCATIONS_PER_USER = 5

LocationPayload = namedtuple('LocationPayload', ['zip', 'lat', 'lon'])


def _normalize_zip(value):
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidLocationShape('zip must be a string')
    value = str(value).strip()
    if not value:
        return None
    if len(value) > ZIP_MAX_LENGTH:
        raise InvalidLocationShape(f"zip must be at most {ZIP_MAX_LENGTH} characters")
    return value


def _normalize_coordinate(value, name, bound):
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if isinstance(value, bool):
        raise InvalidLocationShape(f"{name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidLocationShape(f"{name} must be a number")
    if not math.isfinite(number) or abs(number) > bound:
        raise InvalidLocationShape(f"{name} must be between -{bound} and {bound}")
    return number


def validate_location(zip_code=None, lat=None, lon=None, existing_count=None):
    """Check a candidate location and return it with unset fields as None.

    ``existing_count`` is the number of locations the owner already has. Pass
    it on creation only; updates never hit the cap.
    """
    zip_code = _normalize_zip(zip_code)
    lat = _normalize_coordinate(lat, 'lat', 90)
    lon = _normalize_coordinate(lon, 'lon', 180)

    has_coords = lat is not None and lon is not None
    if zip_code is not None and (lat is not None or lon is not None):
        raise InvalidLocationShape('Provide only zip or lat/lon, not both')
    if zip_code is None and not has_coords:
        raise InvalidLocationShape('Either zip or lat/lon required')

    if existing_count is not None and existing_count >= MAX_LOCATIONS_PER_USER:
        raise LocationLimitExceeded(MAX_LOCATIONS_PER_USER)

    return LocationPayload(zip=zip_code, lat=lat, lon=lon)
