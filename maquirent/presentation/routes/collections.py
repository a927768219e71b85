"""
Collection API
List, read, create, update and delete records of every entity collection.

Writes go through FormEngine with the collection's validation schema:
- validation failures answer 400 {"errors": {...}}
- failures raised while saving answer 400 {"submitError": "..."}
"""

from flask import Blueprint, abort, jsonify, request

from maquirent.buisness.core.form_engine import FormEngine
from maquirent.buisness.core.validation import coerce_numbers, get_schema
from maquirent.data.collections import COLLECTIONS_BY_ROUTE, CollectionSpec
from maquirent.presentation.routes.context import get_store, json_body
from maquirent.services.record_service import RecordService
from maquirent.utils.logger import get_logger
from maquirent.utils.logging_sanitizer import sanitize_payload

logger = get_logger("maquirent.presentation.routes.collections")

bp = Blueprint('collections', __name__)


def _collection_or_404(route: str) -> CollectionSpec:
    spec = COLLECTIONS_BY_ROUTE.get(route)
    if spec is None:
        abort(404)
    return spec


def _form_response(engine: FormEngine, success_status: int):
    if engine.errors:
        return jsonify({'errors': engine.errors}), 400
    if engine.submit_error:
        return jsonify({'submitError': engine.submit_error}), 400
    return jsonify(engine.submit_result), success_status


@bp.route('/<route>', methods=['GET'])
def list_records(route):
    spec = _collection_or_404(route)
    records = get_store().list(spec.name)

    # Simple equality filters, e.g. ?status=disponible&warehouseId=1
    for field, value in request.args.items():
        records = [record for record in records if str(record.get(field)) == value]

    return jsonify(records)


@bp.route('/<route>/<record_id>', methods=['GET'])
def get_record(route, record_id):
    spec = _collection_or_404(route)
    record = get_store().get(spec.name, record_id)
    if record is None:
        abort(404)
    return jsonify(record)


@bp.route('/<route>', methods=['POST'])
def create_record(route):
    spec = _collection_or_404(route)
    data = json_body()
    if data is None:
        return jsonify({'submitError': 'Se esperaba un objeto JSON'}), 400

    logger.debug(f"Create {spec.name}: {sanitize_payload(data)}")
    store = get_store()
    schema = get_schema(spec.schema)
    engine = FormEngine(
        {},
        validation_schema=schema,
        on_submit=lambda values: store.add(
            spec.name, RecordService.prepare_new(store, spec, coerce_numbers(schema, values))
        ),
    )
    engine.set_values(data)
    engine.handle_submit()
    return _form_response(engine, 201)


@bp.route('/<route>/<record_id>', methods=['PUT', 'PATCH'])
def update_record(route, record_id):
    spec = _collection_or_404(route)
    store = get_store()
    existing = store.get(spec.name, record_id)
    if existing is None:
        abort(404)

    data = json_body()
    if data is None:
        return jsonify({'submitError': 'Se esperaba un objeto JSON'}), 400

    logger.debug(f"Update {spec.name} {record_id}: {sanitize_payload(data)}")
    # The merged record is validated, only the submitted fields are written
    schema = get_schema(spec.schema)
    engine = FormEngine(
        existing,
        validation_schema=schema,
        on_submit=lambda values: store.update(spec.name, record_id, coerce_numbers(schema, data)),
    )
    engine.set_values(data)
    engine.handle_submit()
    return _form_response(engine, 200)


@bp.route('/<route>/<record_id>', methods=['DELETE'])
def delete_record(route, record_id):
    spec = _collection_or_404(route)
    if not get_store().delete(spec.name, record_id):
        abort(404)
    return jsonify({'success': True, 'id': record_id})


@bp.route('/alerts/<alert_id>/resolve', methods=['POST'])
def resolve_alert(alert_id):
    data = json_body() or {}
    alert = get_store().resolve_alert(alert_id, data.get('resolutionNotes'))
    if alert is None:
        abort(404)
    return jsonify(alert)
