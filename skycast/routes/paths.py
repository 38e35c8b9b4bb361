from flask import Blueprint, jsonify
from skycast.services.location_service import LocationService

paths_bp = Blueprint('paths', __name__)
location_service = LocationService()


@paths_bp.route('/hello')
def hello():
    return jsonify({'msg': 'Hi from skycast!'})


@paths_bp.route('/user/create/<username>')
def create_user(username):
    location_service.create_user(username)
    return jsonify({'message': 'user created or exists'})


@paths_bp.route('/location/list/<username>')
def list_locations(username):
    locations = location_service.list_locations(username)
    return jsonify([loc.to_dict() for loc in locations])


@paths_bp.route('/location/add/<username>/zip/<zip_code>')
def add_zip_location(username, zip_code):
    location = location_service.add_location(username, zip_code=zip_code)
    return jsonify({'message': 'location added', 'location': location.to_dict()})


# lat/lon stay strings here: Flask's float converter rejects negative values
@paths_bp.route('/location/add/<username>/lat/<lat>/lon/<lon>')
def add_coordinate_location(username, lat, lon):
    location = location_service.add_location(username, lat=lat, lon=lon)
    return jsonify({'message': 'location added', 'location': location.to_dict()})


@paths_bp.route('/location/update/<int:location_id>/zip/<zip_code>')
def update_zip_location(location_id, zip_code):
    location = location_service.update_location(location_id, zip_code=zip_code)
    return jsonify({'message': 'location updated', 'location': location.to_dict()})


@paths_bp.route('/location/update/<int:location_id>/lat/<lat>/lon/<lon>')
def update_coordinate_location(location_id, lat, lon):
    location = location_service.update_location(location_id, lat=lat, lon=lon)
    return jsonify({'message': 'location updated', 'location': location.to_dict()})


@paths_bp.route('/location/delete/<int:location_id>')
def delete_location(location_id):
    location_service.delete_location(location_id)
    return jsonify({'message': 'location deleted'})


@paths_bp.route('/weather/<username>')
def weather(username):
    return jsonify(location_service.get_weather(username))
