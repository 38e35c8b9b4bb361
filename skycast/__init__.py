import logging
from flask import Flask
from config import Config


def create_app(config_class=None):
    app = Flask(__name__)
    app.config.from_object(config_class or Config)

    # Logging
    logging.basicConfig(
        level=getattr(logging, app.config.get('LOG_LEVEL', 'INFO')),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    # Extensions
    from skycast.extensions import db, migrate
    db.init_app(app)
    from skycast.cli import MIGRATIONS_DIR
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)

    # Make sure models are registered on the metadata before create_all / migrate
    from skycast import models  # noqa: F401

    # Register blueprints
    from skycast.routes import register_blueprints, register_error_handlers
    register_blueprints(app)
    register_error_handlers(app)

    from skycast.cli import register_commands
    register_commands(app)

    # Schema setup runs once here, before any request is served
    if app.config.get('CREATE_SCHEMA_ON_STARTUP'):
        from skycast.cli import create_schema
        with app.app_context():
            create_schema()

    return app
