import logging
from flask import jsonify
from skycast.errors import (
    InvalidLocationShape, InvalidUsername, LocationLimitExceeded,
    LocationNotFound, StoreUnavailable, UserNotFound,
)

logger = logging.getLogger(__name__)


def register_blueprints(app):
    from skycast.routes.health import health_bp
    from skycast.routes.rest import rest_bp
    from skycast.routes.paths import paths_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(rest_bp)
    app.register_blueprint(paths_bp, url_prefix='/api')


def register_error_handlers(app):
    def rejected(status):
        def handler(e):
            return jsonify({'error': e.message}), status
        return handler

    for exc in (InvalidLocationShape, InvalidUsername, LocationLimitExceeded):
        app.register_error_handler(exc, rejected(400))
    for exc in (UserNotFound, LocationNotFound):
        app.register_error_handler(exc, rejected(404))

    @app.errorhandler(StoreUnavailable)
    def store_unavailable(e):
        logger.error(f"Store unavailable: {e.__cause__ or e}", exc_info=e)
        return jsonify({'error': 'internal server error'}), 500
