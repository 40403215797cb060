from flask import Blueprint, current_app, request, jsonify
from api.json_tools import process_json
from blueprints.options import int_option

json_tool_bp = Blueprint('json_tool', __name__)


@json_tool_bp.route('/api/json/process', methods=['POST'])
def api_process_json():
    """Format, minify, validate, escape or unescape JSON"""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        input_data = data.get('data', '')
        operation = data.get('operation', 'format')

        # escaping an empty string is meaningful, everything else needs input
        if not isinstance(input_data, str) or (operation != 'escape' and not input_data.strip()):
            return jsonify({'success': False, 'error': 'No input data provided'}), 400

        settings = current_app.config['TOOL_SETTINGS']['json']
        indent, error = int_option(data, 'indent', settings.get('indent', 2))
        if error:
            return jsonify({'success': False, 'error': error}), 400

        result = process_json(
            input_data,
            operation,
            indent=indent,
            sort_keys=bool(data.get('sort_keys', False)),
        )

        if result['success']:
            return jsonify(result)
        return jsonify(result), 400

    except Exception as e:
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
