"""
Global search across machinery, vehicles, tools, spare parts and warehouses.
"""

from flask import Blueprint, jsonify, request

from maquirent.buisness.core.search import GlobalSearch
from maquirent.presentation.routes.context import get_caches, get_store
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.presentation.routes.search")

bp = Blueprint('search', __name__)


@bp.route('/search')
def search():
    """Ranked results for ?q=; a blank query returns an empty list"""
    query = request.args.get('q', '')
    if not query.strip():
        return jsonify({'query': query, 'results': []})

    searcher = GlobalSearch(get_store().snapshot(), cache=get_caches().search_cache)
    results = searcher.search(query)
    logger.debug(f"Search '{query}' returned {len(results)} results")
    return jsonify({'query': query, 'results': [result.to_dict() for result in results]})
