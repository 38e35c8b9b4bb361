class SkycastError(Exception):
    message = 'skycast error'

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidUsername(SkycastError):
    message = 'username required'


class InvalidLocationShape(SkycastError):
    message = 'Either zip or lat/lon required'


class LocationLimitExceeded(SkycastError):
    message = 'max 5 locations'

    def __init__(self, limit=5):
        self.limit = limit
        super().__init__(f"max {limit} locations")


class UserNotFound(SkycastError):
    message = 'user not found'

    def __init__(self, username=None):
        self.username = username
        super().__init__()


class LocationNotFound(SkycastError):
    message = 'location not found'

    def __init__(self, location_id=None):
        self.location_id = location_id
        super().__init__()


class StoreUnavailable(SkycastError):
    """Persistence layer failure. Detail is logged, never returned to clients."""
    message = 'internal server error'


class InvalidLocation(SkycastError):
    """A stored location has neither a zip nor a coordinate pair."""
    message = 'Invalid location'


class ProviderError(SkycastError):
    """One forecast request failed. Captured inline, never fails the request."""
    message = 'forecast provider error'

    def __init__(self, message=None, status_code=None):
        self.status_code = status_code
        super().__init__(message)
