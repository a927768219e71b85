"""
Dashboard figures
"""

from flask import Blueprint, jsonify

from maquirent.buisness.core.dashboard import compute_dashboard_stats
from maquirent.presentation.routes.context import DASHBOARD_CACHE_KEY, get_caches, get_store

bp = Blueprint('dashboard', __name__)


@bp.route('/dashboard')
def dashboard():
    cache = get_caches().data_cache
    stats = cache.get(DASHBOARD_CACHE_KEY)
    if stats is None:
        stats = compute_dashboard_stats(get_store().snapshot())
        cache.set(DASHBOARD_CACHE_KEY, stats)
    return jsonify(stats)
