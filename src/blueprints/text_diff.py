from flask import Blueprint, current_app, request, jsonify
from api.text_diff import compare_texts
from blueprints.options import int_option

text_diff_bp = Blueprint('text_diff', __name__)


@text_diff_bp.route('/api/text-diff/compare', methods=['POST'])
def api_compare_texts():
    """Compare two inputs and return the diff

    Modes:
    - text: Compare as-is (default)
    - json: Re-indent both documents before comparing
    - html: Pretty-print both fragments before comparing

    Output formats: json (structured lines, default), unified, context, stats-only

    Options:
    - ignore_whitespace: Ignore whitespace differences
    - ignore_case: Case insensitive comparison
    - context_lines: Number of context lines for unified/context output
    """
    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'success': False, 'error': 'Invalid JSON format'}), 400

        # 'text1'/'text2' are accepted as aliases of 'left'/'right'
        left = data.get('left', data.get('text1'))
        right = data.get('right', data.get('text2'))
        if left is None or right is None:
            return jsonify({'success': False, 'error': 'Missing left or right input'}), 400

        settings = current_app.config['TOOL_SETTINGS']['diff']
        context_lines, error = int_option(data, 'context_lines', settings.get('context_lines', 3))
        if error:
            return jsonify({'success': False, 'error': error}), 400

        result = compare_texts(
            str(left),
            str(right),
            mode=data.get('mode', 'text'),
            output_format=data.get('format', 'json'),
            ignore_whitespace=bool(data.get('ignore_whitespace', False)),
            ignore_case=bool(data.get('ignore_case', False)),
            context_lines=context_lines,
        )

        if result['success']:
            return jsonify(result)
        return jsonify(result), 400

    except Exception as e:
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
