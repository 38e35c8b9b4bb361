import os
from dotenv import load_dotenv

load_dotenv()


def _database_url():
    url = os.getenv('DATABASE_URL') or os.getenv('DB_CONNECTION_STRING') or 'postgresql://localhost/skycast'
    # Heroku/Railway style URLs are not accepted by SQLAlchemy 1.4+
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _engine_options():
    options = {'pool_pre_ping': True, 'pool_size': int(os.getenv('DB_POOL_SIZE', '5'))}
    if os.getenv('DB_SSL', 'false').lower() == 'true':
        connect_args = {'sslmode': 'verify-full'}
        if os.getenv('DB_CA_CERT'):
            connect_args['sslrootcert'] = os.getenv('DB_CA_CERT')
        options['connect_args'] = connect_args
    return options


class Config:
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options()
    CREATE_SCHEMA_ON_STARTUP = os.getenv('CREATE_SCHEMA_ON_STARTUP', 'false').lower() == 'true'

    # OpenWeatherMap
    OPENWEATHER_API_KEY = os.getenv('OPENWEATHER_API_KEY') or os.getenv('OPEN_WEATHER_API_KEY')
    OPENWEATHER_FORECAST_URL = os.getenv(
        'OPENWEATHER_FORECAST_URL', 'https://api.openweathermap.org/data/2.5/forecast'
    )
    FORECAST_TIMEOUT_SECONDS = float(os.getenv('FORECAST_TIMEOUT_SECONDS', '10'))
    FORECAST_WORKERS = int(os.getenv('FORECAST_WORKERS', '5'))

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}  # SQLite doesn't support pool_size
    CREATE_SCHEMA_ON_STARTUP = False
    OPENWEATHER_API_KEY = 'test-key'
    OPENWEATHER_FORECAST_URL = 'https://api.openweathermap.org/data/2.5/forecast'
    FORECAST_WORKERS = 1
