from flask import Blueprint, current_app, request, jsonify
from api.timestamp import process_timestamp_event

timestamp_bp = Blueprint('timestamp', __name__)


def _timestamp_settings():
    return current_app.config['TOOL_SETTINGS']['timestamp']


def _run(state, event, timezone_name=None):
    settings = _timestamp_settings()
    result = process_timestamp_event(
        state,
        event,
        timezone_name=timezone_name if timezone_name not in (None, '') else settings.get('timezone'),
        display_format=settings.get('local_display_format'),
    )
    if result['success']:
        return jsonify(result)
    return jsonify(result), 400


@timestamp_bp.route('/api/timestamp/apply', methods=['POST'])
def apply_timestamp_event():
    """Apply one edit event to the supplied converter state

    Body: {"state": {...}, "event": {"type": "edit_seconds", "value": "0"}, "timezone": "UTC"}
    """
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        if 'event' not in data:
            return jsonify({'success': False, 'error': 'Event is required'}), 400

        return _run(data.get('state'), data['event'], data.get('timezone'))

    except Exception as e:
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500


@timestamp_bp.route('/api/timestamp/convert', methods=['POST'])
def convert_timestamp():
    """Convert a single value starting from an empty state

    Body: {"value": "1700000000", "unit": "seconds" | "millis" | "local"}
    """
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        value = data.get('value')
        if value is None or not str(value).strip():
            return jsonify({'success': False, 'error': 'No input data provided'}), 400

        event_types = {'local': 'edit_local', 'seconds': 'edit_seconds', 'millis': 'edit_millis'}
        unit = data.get('unit', 'seconds')
        if unit not in event_types:
            return jsonify({'success': False, 'error': f'Unsupported unit: {unit}'}), 400

        return _run(None, {'type': event_types[unit], 'value': str(value)}, data.get('timezone'))

    except Exception as e:
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500


@timestamp_bp.route('/api/timestamp/now', methods=['GET'])
def current_timestamp():
    try:
        return _run(None, {'type': 'use_now'}, request.args.get('timezone'))
    except Exception as e:
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
