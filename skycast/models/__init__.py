from skycast.models.user import User
from skycast.models.location import Location

__all__ = ['User', 'Location']
