import logging
import os
import click
from flask_migrate import stamp
from skycast.extensions import db, migrate

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')


def create_schema():
    """Create the users and locations tables and stamp the Alembic head.

    Stamping keeps a later ``flask db upgrade`` from re-creating the tables.
    """
    db.create_all()
    if os.path.isdir(migrate.directory):
        stamp(directory=migrate.directory)
    else:
        logger.warning(f"No migrations at {migrate.directory}; schema created without a version stamp")
    logger.info("Database schema ready")


def register_commands(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create the database schema."""
        create_schema()
        click.echo('Initialized the database.')
