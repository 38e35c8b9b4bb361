import logging
from skycast.errors import InvalidUsername
from skycast.models.user import USERNAME_MAX_LENGTH
from skycast.services.forecast_service import ForecastAggregator
from skycast.services.location_store import LocationStore
from skycast.services.location_validator import validate_location

logger = logging.getLogger(__name__)


def _clean_username(username):
    username = username.strip() if isinstance(username, str) else ''
    if not username:
        raise InvalidUsername('username required')
    if len(username) > USERNAME_MAX_LENGTH:
        raise InvalidUsername(f"username must be at most {USERNAME_MAX_LENGTH} characters")
    return username


class LocationService:
    """User, location and weather operations shared by every route style."""

    def __init__(self, store=None, aggregator_factory=None):
        self.store = store or LocationStore()
        self.aggregator_factory = aggregator_factory or ForecastAggregator

    def create_user(self, username):
        return self.store.ensure_user(_clean_username(username))

    def _owner_id(self, username):
        if username is None:
            return None
        return self.store.get_user(_clean_username(username)).id

    def list_locations(self, username):
        user = self.store.get_user(_clean_username(username))
        return self.store.list_locations(user.id)

    def add_location(self, username, zip_code=None, lat=None, lon=None):
        user = self.store.get_user(_clean_username(username))
        count = self.store.count_locations(user.id)
        payload = validate_location(zip_code, lat, lon, existing_count=count)
        location = self.store.add_location(user.id, payload)
        logger.info(f"Added location {location.id} for {user.username}")
        return location

    def update_location(self, location_id, zip_code=None, lat=None, lon=None, username=None):
        """Switch a location to the given zip or coordinates.

        When ``username`` is given the location must belong to that user.
        """
        payload = validate_location(zip_code, lat, lon)
        return self.store.update_location(location_id, payload, user_id=self._owner_id(username))

    def delete_location(self, location_id, username=None):
        self.store.delete_location(location_id, user_id=self._owner_id(username))
        logger.info(f"Deleted location {location_id}")

    def get_weather(self, username):
        user = self.store.get_user(_clean_username(username))
        projections = [loc.projection() for loc in self.store.list_locations(user.id)]
        # No query stays open while waiting on the provider
        self.store.release()
        return self.aggregator_factory().aggregate(projections)
