from flask import Blueprint, current_app, request, jsonify
from api.sql_tools import process_sql

sql_tool_bp = Blueprint('sql_tool', __name__)


@sql_tool_bp.route('/api/sql/process', methods=['POST'])
def api_process_sql():
    """Format, minify or validate SQL"""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        input_data = data.get('data', '')
        operation = data.get('operation', 'format')

        if not isinstance(input_data, str) or not input_data.strip():
            return jsonify({'success': False, 'error': 'No input data provided'}), 400

        settings = current_app.config['TOOL_SETTINGS']['sql']
        result = process_sql(
            input_data,
            operation,
            keyword_case=data.get('keyword_case', settings.get('keyword_case', 'upper')),
            indent_width=data.get('indent_width', settings.get('indent_width', 2)),
            lines_between_queries=settings.get('lines_between_queries', 2),
        )

        if result['success']:
            return jsonify(result)
        return jsonify(result), 400

    except Exception as e:
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
