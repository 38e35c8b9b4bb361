#!/usr/bin/env python3
"""Print the aggregated forecast for one user, for testing/debugging."""

import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from skycast import create_app
from skycast.services.location_service import LocationService

if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("usage: forecast_once.py <username>")
        sys.exit(1)

    username = sys.argv[1]
    app = create_app()

    print(f"Fetching forecasts for {username}...")
    with app.app_context():
        results = LocationService().get_weather(username)

    for result in results:
        loc = result['location']
        label = loc['zip'] or f"{loc['lat']},{loc['lon']}"
        if 'error' in result:
            print(f"  {label}: ERROR {result['error']}")
        else:
            entries = result['forecast'].get('list', [])
            print(f"  {label}: {result['place'] or '?'} ({len(entries)} entries)")

    if '--json' in sys.argv:
        print(json.dumps(results, indent=2))
