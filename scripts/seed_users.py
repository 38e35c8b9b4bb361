#!/usr/bin/env python3
"""Load users and their locations from JSON into the database. Idempotent."""

import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from skycast import create_app
from skycast.errors import SkycastError
from skycast.services.location_service import LocationService


def seed_users(filepath):
    """Each entry: {"username": ..., "locations": [{"zip": ...} | {"lat": ..., "lon": ...}]}.

    Locations already stored for the user are skipped.
    """
    with open(filepath) as f:
        users = json.load(f)

    service = LocationService()
    added = 0
    skipped = 0
    for u in users:
        service.create_user(u['username'])
        existing = {
            (loc.zip, loc.lat, loc.lon) for loc in service.list_locations(u['username'])
        }
        for loc in u.get('locations', []):
            key = (loc.get('zip'), loc.get('lat'), loc.get('lon'))
            if key in existing:
                skipped += 1
                continue
            try:
                service.add_location(u['username'], zip_code=loc.get('zip'), lat=loc.get('lat'), lon=loc.get('lon'))
                added += 1
            except SkycastError as e:
                print(f"  {u['username']}: skipped {loc} ({e.message})")
                skipped += 1

    print(f"Locations: {added} added, {skipped} skipped")


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("usage: seed_users.py <users.json>")
        sys.exit(1)

    app = create_app()
    with app.app_context():
        seed_users(sys.argv[1])
