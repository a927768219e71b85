"""
Notification routes
In-app notifications: list, add, mark read, remove, clear.
"""

from flask import Blueprint, abort, jsonify

from maquirent.presentation.routes.context import get_notifications, json_body
from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.presentation.routes.notifications")

bp = Blueprint('notifications', __name__)


@bp.route('/notifications', methods=['GET'])
def list_notifications():
    center = get_notifications()
    notifications = center.list()
    return jsonify({
        'notifications': notifications,
        'unreadCount': sum(1 for n in notifications if not n.get('read')),
    })


@bp.route('/notifications', methods=['POST'])
def add_notification():
    data = json_body()
    if data is None:
        return jsonify({'submitError': 'Se esperaba un objeto JSON'}), 400
    try:
        notification_id = get_notifications().add(data)
    except ValueError as e:
        return jsonify({'submitError': str(e)}), 400
    return jsonify({'id': notification_id}), 201


@bp.route('/notifications/<notification_id>/read', methods=['POST'])
def mark_as_read(notification_id):
    if not get_notifications().mark_as_read(notification_id):
        abort(404)
    return jsonify({'success': True})


@bp.route('/notifications/read-all', methods=['POST'])
def mark_all_as_read():
    count = get_notifications().mark_all_as_read()
    return jsonify({'success': True, 'count': count})


@bp.route('/notifications/<notification_id>', methods=['DELETE'])
def remove_notification(notification_id):
    if not get_notifications().remove(notification_id):
        abort(404)
    return jsonify({'success': True})


@bp.route('/notifications', methods=['DELETE'])
def clear_notifications():
    get_notifications().clear_all()
    logger.info("Notifications cleared")
    return jsonify({'success': True})
