"""
Main routes: health and status endpoints plus the single-page app fallback.
"""

import time
from pathlib import Path

from flask import Blueprint, abort, current_app, jsonify, send_from_directory

from maquirent import APP_VERSION, limiter
from maquirent.buisness.core.dates import isoformat_z, utcnow
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.presentation.routes.main")

bp = Blueprint('main', __name__)

NO_CACHE_FILES = ('sw.js', 'index.html')


def uptime_seconds() -> float:
    return max(0.0, time.monotonic() - current_app.extensions['maquirent.started_at'])


@bp.route('/health')
@limiter.exempt
def health():
    return jsonify({
        'status': 'OK',
        'timestamp': isoformat_z(utcnow()),
        'uptime': uptime_seconds(),
        'environment': current_app.config['APP_ENV'],
    }), 200


@bp.route('/api/status')
def api_status():
    return jsonify({
        'message': 'MaquiRent API funcionando correctamente',
        'version': APP_VERSION,
        'timestamp': isoformat_z(utcnow()),
    })


@bp.route('/api/ping')
@limiter.exempt
def api_ping():
    return jsonify({'pong': True, 'timestamp': int(time.time() * 1000)})


@bp.route('/', defaults={'path': ''})
@bp.route('/<path:path>')
@limiter.exempt
def spa(path):
    """Serve a file from the build directory, or the index document for client-side routes."""
    if path == 'api' or path.startswith('api/'):
        abort(404)

    build_dir = Path(current_app.config['STATIC_BUILD_DIR'])
    target = build_dir / path

    if path and target.is_file():
        response = send_from_directory(build_dir, path)
    else:
        if not (build_dir / 'index.html').is_file():
            logger.error(f"index.html missing from build directory {build_dir}")
        response = send_from_directory(build_dir, 'index.html')

    if Path(path).name in NO_CACHE_FILES or not path:
        response.headers['Cache-Control'] = 'no-cache'
    return response
