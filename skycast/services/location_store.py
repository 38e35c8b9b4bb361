import logging
from functools import wraps
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from skycast.extensions import db
from skycast.errors import LocationNotFound, StoreUnavailable, UserNotFound
from skycast.models.location import Location
from skycast.models.user import User

logger = logging.getLogger(__name__)


def _store_call(method):
    """Roll back and raise StoreUnavailable on any database failure."""
    @wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Store operation {method.__name__} failed: {e}")
            raise StoreUnavailable() from e

    return wrapper


class LocationStore:
    @_store_call
    def ensure_user(self, username):
        """Create the user if it does not exist yet. Idempotent."""
        user = User.query.filter_by(username=username).first()
        if user:
            return user

        user = User(username=username)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same username
            db.session.rollback()
            user = User.query.filter_by(username=username).first()
            if user is None:
                raise
            return user

        logger.info(f"Created user {username} (id={user.id})")
        return user

    @_store_call
    def get_user(self, username):
        user = User.query.filter_by(username=username).first()
        if not user:
            raise UserNotFound(username)
        return user

    @_store_call
    def count_locations(self, user_id):
        return db.session.query(func.count(Location.id)).filter(
            Location.user_id == user_id
        ).scalar()

    @_store_call
    def list_locations(self, user_id):
        return Location.query.filter_by(user_id=user_id).order_by(Location.id).all()

    @_store_call
    def add_location(self, user_id, payload):
        """Insert a location. The payload must already be validated."""
        location = Location(user_id=user_id)
        location.apply(payload)
        db.session.add(location)
        db.session.commit()
        return location

    def _owned_location(self, location_id, user_id):
        location = db.session.get(Location, location_id)
        if location is None or (user_id is not None and location.user_id != user_id):
            raise LocationNotFound(location_id)
        return location

    @_store_call
    def update_location(self, location_id, payload, user_id=None):
        """Replace zip/lat/lon wholesale. Ownership is checked when user_id is given."""
        location = self._owned_location(location_id, user_id)
        location.apply(payload)
        db.session.commit()
        return location

    @_store_call
    def delete_location(self, location_id, user_id=None):
        location = self._owned_location(location_id, user_id)
        db.session.delete(location)
        db.session.commit()

    def release(self):
        """Return the session's connection to the pool."""
        db.session.close()
