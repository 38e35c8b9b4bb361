from flask_migrate import upgrade
from sqlalchemy import inspect, text

from config import TestConfig
from skycast import create_app
from skycast.cli import create_schema
from skycast.extensions import db

HEAD_REVISION = '3b1f0c9d2a47'


def _file_config(tmp_path, create_on_startup):
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'skycast.db'}"
        CREATE_SCHEMA_ON_STARTUP = create_on_startup
    return FileConfig


def _version():
    return db.session.execute(text('SELECT version_num FROM alembic_version')).scalar()


class TestSchemaSetup:
    def test_startup_schema_is_stamped_for_upgrade(self, tmp_path):
        app = create_app(_file_config(tmp_path, True))

        with app.app_context():
            assert _version() == HEAD_REVISION
            # Must be a no-op rather than re-creating the tables
            upgrade()
            assert _version() == HEAD_REVISION
            assert {'users', 'locations'} <= set(inspect(db.engine).get_table_names())

    def test_upgrade_then_create_schema(self, tmp_path):
        app = create_app(_file_config(tmp_path, False))

        with app.app_context():
            upgrade()
            assert _version() == HEAD_REVISION

            create_schema()
            assert _version() == HEAD_REVISION

    def test_schema_not_created_without_startup_flag(self, tmp_path):
        app = create_app(_file_config(tmp_path, False))

        with app.app_context():
            assert inspect(db.engine).get_table_names() == []
