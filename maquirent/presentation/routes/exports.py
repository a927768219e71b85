"""
Export routes
Download a collection as CSV, spreadsheet or PDF.
"""

import io

from flask import Blueprint, abort, jsonify, request, send_file

from maquirent.data.collections import COLLECTIONS_BY_ROUTE
from maquirent.presentation.routes.context import get_store
from maquirent.services.export_service import ExportService

bp = Blueprint('exports', __name__)


@bp.route('/export/<route>')
def export_collection(route):
    spec = COLLECTIONS_BY_ROUTE.get(route)
    if spec is None:
        abort(404)

    export_format = request.args.get('format', 'csv')
    try:
        export = ExportService.export(spec.module, get_store().list(spec.name), export_format, title=spec.label)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    return send_file(
        io.BytesIO(export.content),
        as_attachment=True,
        download_name=export.filename,
        mimetype=export.mimetype,
    )
