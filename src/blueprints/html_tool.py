from flask import Blueprint, current_app, request, jsonify
from api.html_tools import process_html
from blueprints.options import int_option

html_tool_bp = Blueprint('html_tool', __name__)


@html_tool_bp.route('/api/html/process', methods=['POST'])
def api_process_html():
    """Format, minify or validate HTML"""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        input_data = data.get('data', '')
        operation = data.get('operation', 'format')

        if not isinstance(input_data, str) or not input_data.strip():
            return jsonify({'success': False, 'error': 'No input data provided'}), 400

        settings = current_app.config['TOOL_SETTINGS']['html']
        indent, error = int_option(data, 'indent', settings.get('indent', 2))
        if error:
            return jsonify({'success': False, 'error': error}), 400

        result = process_html(input_data, operation, indent=indent)

        if result['success']:
            return jsonify(result)
        return jsonify(result), 400

    except Exception as e:
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
