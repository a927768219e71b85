from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
import time
from maquirent.utils.logger import get_logger

APP_NAME = 'MaquiRent'
APP_VERSION = '1.0.0'

# Initialize extensions
db = SQLAlchemy()
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://"
)


def env_flag(name, default='False'):
    """Read a boolean flag from the environment ('true', '1', 'yes', 'on')."""
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config_overrides=None):
    """
    Application factory.

    Args:
        config_overrides (dict, optional): Values applied on top of the
            environment-derived configuration (used by tests).

    Returns:
        Flask: Configured application
    """
    from pathlib import Path

    base_dir = Path(__file__).parent.parent

    # The SPA build is served by the catch-all route, not Flask's static view
    app = Flask(__name__, static_folder=None)

    logger = get_logger("maquirent")
    logger.info("Initializing Flask application")

    # Configuration
    app.config['APP_ENV'] = os.environ.get('APP_ENV') or os.environ.get('NODE_ENV') or 'development'
    app.config['STATIC_BUILD_DIR'] = os.environ.get('STATIC_BUILD_DIR', str(base_dir / 'dist'))
    app.config['PORT'] = int(os.environ.get('PORT', '8080'))
    app.config['HOST'] = os.environ.get('HOST', '0.0.0.0')
    app.config['KEEP_ALIVE_SECONDS'] = int(os.environ.get('KEEP_ALIVE_SECONDS', str(25 * 60)))
    app.config['CURRENT_USER'] = os.environ.get('CURRENT_USER', 'current-user')

    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        instance_dir = base_dir / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'maquirent.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Rate limiting (Flask-Limiter reads these keys)
    app.config['RATELIMIT_DEFAULT'] = os.environ.get('RATELIMIT_DEFAULT', '1000 per hour')
    app.config['RATELIMIT_ENABLED'] = env_flag('RATELIMIT_ENABLED', 'True')
    app.config['RATELIMIT_HEADERS_ENABLED'] = True

    if config_overrides:
        app.config.update(config_overrides)

    logger.debug(f"Static build directory: {app.config['STATIC_BUILD_DIR']}")
    logger.debug(f"Environment: {app.config['APP_ENV']}")

    # Initialize extensions with app
    db.init_app(app)
    limiter.init_app(app)

    from maquirent.utils.cache import CacheRegistry
    app.extensions['maquirent.caches'] = CacheRegistry()
    app.extensions['maquirent.started_at'] = time.monotonic()

    # Import models to ensure they're registered with SQLAlchemy
    from maquirent.data.storage_slot import StorageSlot

    with app.app_context():
        db.create_all()
    logger.debug("Storage tables ensured")

    # Register blueprints
    from maquirent.presentation.routes import init_app as init_routes
    init_routes(app)

    from maquirent.presentation.errors import register_error_handlers
    register_error_handlers(app)

    @app.before_request
    def cleanup_caches():
        """Evict expired cache entries every few minutes"""
        app.extensions['maquirent.caches'].cleanup_if_due()

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response

    logger.info("Flask application initialization complete")

    return app
