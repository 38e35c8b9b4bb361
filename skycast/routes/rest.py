from flask import Blueprint, jsonify, request
from skycast.services.location_service import LocationService

rest_bp = Blueprint('rest', __name__)
location_service = LocationService()


def _json_object():
    """Request body as a dict: {} when absent, None when it is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _body_must_be_object():
    return jsonify({'error': 'JSON object body required'}), 400


def _username_required():
    return jsonify({'error': 'username required'}), 400


@rest_bp.route('/user', methods=['POST'])
def create_user():
    """Create a user, or do nothing if it already exists."""
    data = _json_object()
    if data is None:
        return _body_must_be_object()
    if not data.get('username'):
        return _username_required()

    location_service.create_user(data['username'])
    return jsonify({'message': 'user created or exists'})


@rest_bp.route('/locations')
def list_locations():
    username = request.args.get('username')
    if not username:
        return _username_required()

    locations = location_service.list_locations(username)
    return jsonify([loc.to_dict() for loc in locations])


@rest_bp.route('/location', methods=['POST'])
def add_location():
    """Add a location from JSON { username, zip } or { username, lat, lon }."""
    data = _json_object()
    if data is None:
        return _body_must_be_object()
    if not data.get('username'):
        return _username_required()

    location = location_service.add_location(
        data['username'],
        zip_code=data.get('zip'),
        lat=data.get('lat'),
        lon=data.get('lon'),
    )
    return jsonify({'message': 'location added', 'location': location.to_dict()})


@rest_bp.route('/location/<int:location_id>', methods=['PUT'])
def update_location(location_id):
    data = _json_object()
    if data is None:
        return _body_must_be_object()
    location = location_service.update_location(
        location_id,
        zip_code=data.get('zip'),
        lat=data.get('lat'),
        lon=data.get('lon'),
        username=data.get('username') or None,
    )
    return jsonify({'message': 'location updated', 'location': location.to_dict()})


@rest_bp.route('/location/<int:location_id>', methods=['DELETE'])
def delete_location(location_id):
    location_service.delete_location(location_id, username=request.args.get('username') or None)
    return jsonify({'message': 'location deleted'})


@rest_bp.route('/weather')
def weather():
    """Forecast for every location of ?username=, one entry per location."""
    username = request.args.get('username')
    if not username:
        return _username_required()

    return jsonify(location_service.get_weather(username))
