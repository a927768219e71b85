"""
Routes package for MaquiRent
The JSON API lives under /api; everything else falls through to the
single-page app.
"""

from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.presentation.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from . import main, collections, search, dashboard, notifications, exports

    app.register_blueprint(main.bp)

    # API blueprints
    app.register_blueprint(search.bp, url_prefix='/api')
    app.register_blueprint(dashboard.bp, url_prefix='/api')
    app.register_blueprint(notifications.bp, url_prefix='/api')
    app.register_blueprint(exports.bp, url_prefix='/api')
    app.register_blueprint(collections.bp, url_prefix='/api')

    logger.info("All route blueprints registered successfully")
