import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from flask import current_app, has_app_context
from skycast.errors import SkycastError
from skycast.integrations.openweather import OpenWeatherClient

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 5


def _project(location):
    if isinstance(location, dict):
        return {'zip': location.get('zip'), 'lat': location.get('lat'), 'lon': location.get('lon')}
    return {'zip': location.zip, 'lat': location.lat, 'lon': location.lon}


def compose_place(document):
    """Display name from the provider's city block: "Tokyo, JP", "Tokyo" or ""."""
    city = document.get('city') if isinstance(document, dict) else None
    if not isinstance(city, dict):
        city = {}
    name = city.get('name') or None
    country = city.get('country') or None

    if name and country:
        return f"{name}, {country}"
    return name or country or ''


class ForecastAggregator:
    """Fan out one forecast request per location and collect every outcome.

    Each location succeeds or fails on its own; results come back in the
    order the locations were given.
    """

    def __init__(self, client=None, max_workers=None):
        self.client = client or OpenWeatherClient()
        if max_workers is None:
            config = current_app.config if has_app_context() else {}
            max_workers = config.get('FORECAST_WORKERS', DEFAULT_WORKERS)
        self.max_workers = max(1, int(max_workers))

    def _fetch_one(self, index, location, url):
        """Fetch a single forecast (may run in thread pool)."""
        try:
            document = self.client.fetch_forecast(location, url=url)
            return index, {
                'location': location,
                'place': compose_place(document),
                'forecast': document,
            }
        except Exception as e:
            return index, {'location': location, 'error': str(e)}

    def aggregate(self, locations):
        projections = [_project(loc) for loc in locations]
        results = [None] * len(projections)
        pending = []

        for index, location in enumerate(projections):
            try:
                url = self.client.forecast_url(location)
            except SkycastError as e:
                results[index] = {'location': location, 'error': e.message}
                continue
            pending.append((index, location, url))

        if self.max_workers == 1 or len(pending) <= 1:
            for index, location, url in pending:
                _, result = self._fetch_one(index, location, url)
                results[index] = result
        else:
            workers = min(self.max_workers, len(pending))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(self._fetch_one, index, location, url)
                    for index, location, url in pending
                ]
                for future in as_completed(futures):
                    index, result = future.result()
                    results[index] = result

        failed = 0
        for result in results:
            if 'error' in result:
                failed += 1
                logger.warning(f"Forecast failed for {result['location']}: {result['error']}")

        logger.info(f"[Forecast] {len(results) - failed} ok, {failed} failed")
        return results
