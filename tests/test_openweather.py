from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from skycast.errors import InvalidLocation, ProviderError
from skycast.integrations.openweather import FORECAST_URL, OpenWeatherClient, build_forecast_url
from tests.conftest import fake_response, forecast_document


def _query(url):
    return parse_qs(urlsplit(url).query)


class TestBuildForecastUrl:
    def test_zip_defaults_to_us(self):
        url = build_forecast_url({'zip': '94040', 'lat': None, 'lon': None}, 'k')
        assert url == f"{FORECAST_URL}?zip=94040,us&appid=k&units=metric"

    def test_zip_with_country_unchanged(self):
        url = build_forecast_url({'zip': '94040,jp'}, 'k')
        assert 'zip=94040,jp&' in url
        assert 'us' not in _query(url)['zip'][0]

    def test_coordinates(self):
        url = build_forecast_url({'zip': None, 'lat': 37.4, 'lon': -122.1}, 'k')
        query = _query(url)
        assert query['lat'] == ['37.4']
        assert query['lon'] == ['-122.1']
        assert query['units'] == ['metric']
        assert 'zip' not in query

    def test_zero_coordinates_use_coordinate_mode(self):
        url = build_forecast_url({'lat': 0.0, 'lon': 0.0}, 'k')
        query = _query(url)
        assert query['lat'] == ['0.0']
        assert 'zip' not in query

    def test_coordinates_preferred_over_zip(self):
        url = build_forecast_url({'zip': '94040', 'lat': 1.0, 'lon': 2.0}, 'k')
        assert 'zip' not in _query(url)

    def test_accepts_objects(self):
        loc = MagicMock(zip='10115,de', lat=None, lon=None)
        assert 'zip=10115,de' in build_forecast_url(loc, 'k')

    @pytest.mark.parametrize('location', [
        {},
        {'zip': '', 'lat': None, 'lon': None},
        {'zip': None, 'lat': 37.4, 'lon': None},
    ])
    def test_invalid_location(self, location):
        with pytest.raises(InvalidLocation):
            build_forecast_url(location, 'k')


class TestOpenWeatherClient:
    def _client(self, response=None, error=None):
        session = MagicMock()
        if error:
            session.get.side_effect = error
        else:
            session.get.return_value = response
        return OpenWeatherClient(api_key='k', timeout=3, session=session), session

    def test_reads_app_config(self, app):
        with app.app_context():
            client = OpenWeatherClient(session=MagicMock())
        assert client.api_key == 'test-key'
        assert client.base_url == FORECAST_URL

    def test_fetch_success(self):
        client, session = self._client(fake_response(200, forecast_document()))
        data = client.fetch_forecast({'zip': '94040'})

        assert data['city']['name'] == 'Mountain View'
        session.get.assert_called_once_with(f"{FORECAST_URL}?zip=94040,us&appid=k&units=metric", timeout=3)

    def test_http_error_uses_provider_message(self):
        body = {'cod': 401, 'message': 'Invalid API key. Please see https://openweathermap.org/faq#error401'}
        client, _ = self._client(fake_response(401, body))

        with pytest.raises(ProviderError) as exc:
            client.fetch_forecast({'zip': '94040'})
        assert exc.value.status_code == 401
        assert exc.value.message.startswith('HTTP 401: Invalid API key')

    def test_http_error_without_json(self):
        client, _ = self._client(fake_response(502, json_error=True))

        with pytest.raises(ProviderError) as exc:
            client.fetch_forecast({'lat': 1.0, 'lon': 2.0})
        assert exc.value.message == 'HTTP 502'

    def test_network_error(self):
        client, _ = self._client(error=requests.ConnectionError('connection refused'))

        with pytest.raises(ProviderError) as exc:
            client.fetch_forecast({'zip': '94040'})
        assert 'connection refused' in exc.value.message

    @pytest.mark.parametrize('response', [
        fake_response(200, json_error=True),
        fake_response(200, ['not', 'a', 'document']),
    ])
    def test_malformed_body(self, response):
        client, _ = self._client(response)

        with pytest.raises(ProviderError) as exc:
            client.fetch_forecast({'zip': '94040'})
        assert exc.value.message == 'Malformed forecast response'

    def test_default_uses_requests_get(self):
        client = OpenWeatherClient(api_key='k', timeout=3)
        with patch('skycast.integrations.openweather.requests.get',
                   return_value=fake_response(200, forecast_document())) as get:
            data = client.fetch_forecast({'lat': 1.0, 'lon': 2.0})

        assert data['city']['country'] == 'US'
        get.assert_called_once_with(f"{FORECAST_URL}?lat=1.0&lon=2.0&appid=k&units=metric", timeout=3)
