import logging
from urllib.parse import urlencode
import requests
from flask import current_app, has_app_context
from skycast.errors import InvalidLocation, ProviderError

logger = logging.getLogger(__name__)

FORECAST_URL = 'https://api.openweathermap.org/data/2.5/forecast'
DEFAULT_COUNTRY = 'us'
UNITS = 'metric'
DEFAULT_TIMEOUT = 10


def _field(location, name):
    if isinstance(location, dict):
        return location.get(name)
    return getattr(location, name, None)


def normalize_zip(zip_code):
    """Default to US when no country code is given ("94040" -> "94040,us")."""
    if ',' in zip_code:
        return zip_code
    return f"{zip_code},{DEFAULT_COUNTRY}"


def build_forecast_url(location, api_key, base_url=FORECAST_URL):
    """Build the 5-day forecast URL for a location record or projection.

    Coordinates win over zip when both happen to be stored. Raises
    InvalidLocation when neither mode is usable.
    """
    lat = _field(location, 'lat')
    lon = _field(location, 'lon')
    zip_code = _field(location, 'zip')

    if lat is not None and lon is not None:
        params = {'lat': lat, 'lon': lon}
    elif zip_code:
        params = {'zip': normalize_zip(zip_code)}
    else:
        raise InvalidLocation()

    params['appid'] = api_key or ''
    params['units'] = UNITS
    return f"{base_url}?{urlencode(params, safe=',')}"


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('message'):
        return f"HTTP {response.status_code}: {body['message']}"
    return f"HTTP {response.status_code}"


class OpenWeatherClient:
    """OpenWeatherMap forecast client.

    Each call goes through ``requests.get`` so worker threads never share a
    connection pool. A ``session`` (anything with ``get``) may be injected.
    """

    def __init__(self, api_key=None, base_url=None, timeout=None, session=None):
        config = current_app.config if has_app_context() else {}
        self.api_key = api_key or config.get('OPENWEATHER_API_KEY')
        self.base_url = base_url or config.get('OPENWEATHER_FORECAST_URL') or FORECAST_URL
        self.timeout = timeout or config.get('FORECAST_TIMEOUT_SECONDS') or DEFAULT_TIMEOUT
        self.http = session or requests

        if not self.api_key:
            logger.warning("OPENWEATHER_API_KEY is not set; forecast requests will be rejected upstream")

    def forecast_url(self, location):
        return build_forecast_url(location, self.api_key, self.base_url)

    def fetch_forecast(self, location, url=None):
        """Fetch the forecast document for one location. Raises ProviderError."""
        url = url or self.forecast_url(location)
        try:
            resp = self.http.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ProviderError(str(e))

        if not resp.ok:
            raise ProviderError(_error_message(resp), status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError:
            raise ProviderError('Malformed forecast response', status_code=resp.status_code)
        if not isinstance(data, dict):
            raise ProviderError('Malformed forecast response', status_code=resp.status_code)
        return data
