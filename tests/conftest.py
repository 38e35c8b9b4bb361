import pytest
from unittest.mock import MagicMock

from skycast import create_app
from skycast.extensions import db as _db
from skycast.models.location import Location
from skycast.models.user import User
from config import TestConfig


@pytest.fixture(scope='session')
def app():
    """Create app with test config."""
    app = create_app(TestConfig)
    return app


@pytest.fixture(autouse=True)
def setup_db(app):
    """Create tables before each test, drop after."""
    with app.app_context():
        _db.create_all()
        yield
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_session(app):
    with app.app_context():
        yield _db.session


@pytest.fixture
def sample_user(db_session):
    user = User(username='alice')
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def sample_locations(db_session, sample_user):
    """Three locations for alice: a US zip, coordinates, and a Japanese zip."""
    locations = [
        Location(user_id=sample_user.id, zip='94040'),
        Location(user_id=sample_user.id, lat=37.4, lon=-122.1),
        Location(user_id=sample_user.id, zip='100-0001,jp'),
    ]
    db_session.add_all(locations)
    db_session.commit()
    return locations


def forecast_document(name='Mountain View', country='US'):
    city = {}
    if name is not None:
        city['name'] = name
    if country is not None:
        city['country'] = country
    return {'cod': '200', 'cnt': 1, 'list': [{'dt': 1760000000, 'main': {'temp': 18.2}}], 'city': city}


def fake_response(status_code=200, body=None, json_error=False):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    if json_error:
        resp.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        resp.json.return_value = body
    return resp
