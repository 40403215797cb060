from flask import Blueprint, request, jsonify
from api.base64_tools import process_base64

base64_tool_bp = Blueprint('base64_tool', __name__)


@base64_tool_bp.route('/api/base64/process', methods=['POST'])
def api_process_base64():
    """Encode text to Base64 or decode it back"""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        input_data = data.get('data', '')
        operation = data.get('operation', 'encode')

        if not isinstance(input_data, str) or not input_data:
            return jsonify({'success': False, 'error': 'No input data provided'}), 400

        result = process_base64(input_data, operation, url_safe=bool(data.get('url_safe', False)))

        if result['success']:
            return jsonify(result)
        return jsonify(result), 400

    except Exception as e:
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
