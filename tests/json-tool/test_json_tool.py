"""
Tests for the JSON tool backend and its endpoint.
"""

import pytest
import json
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from api.exceptions import JsonToolError
from api.json_tools import JsonTool, process_json, VALID_MESSAGE


class TestJsonTool:
    """Test the JsonTool methods."""

    def setup_method(self):
        self.tool = JsonTool()

    def test_format_preserves_key_order(self):
        result = self.tool.format('{"b":1,"a":[1,2]}')
        assert result == '{\n  "b": 1,\n  "a": [\n    1,\n    2\n  ]\n}'

    def test_format_sort_keys(self):
        result = self.tool.format('{"b":1,"a":2}', sort_keys=True)
        assert result.index('"a"') < result.index('"b"')

    def test_format_custom_indent(self):
        assert JsonTool(indent=4).format('{"a":1}') == '{\n    "a": 1\n}'

    def test_format_keeps_unicode(self):
        assert '"café"' in self.tool.format('{"name": "café"}')

    def test_format_invalid(self):
        with pytest.raises(JsonToolError, match='Invalid JSON'):
            self.tool.format('{"a": }')

    def test_minify(self):
        assert self.tool.minify('{ "a" : 1 ,\n "b": [1, 2] }') == '{"a":1,"b":[1,2]}'

    def test_minify_invalid(self):
        with pytest.raises(JsonToolError):
            self.tool.minify('[1, 2')

    def test_validate_valid(self):
        result = self.tool.validate('[1, 2, 3]')
        assert result == {'valid': True, 'message': VALID_MESSAGE}

    def test_validate_reports_position(self):
        result = self.tool.validate('{\n  "a": 1,\n  "b": }')
        assert result['valid'] is False
        assert result['line'] == 3
        assert 'line 3' in result['error']

    @pytest.mark.parametrize('text', ['NaN', '[Infinity]', '{"a": -Infinity}'])
    def test_non_standard_constants_rejected(self, text):
        assert self.tool.validate(text)['valid'] is False
        with pytest.raises(JsonToolError):
            self.tool.format(text)

    def test_escape(self):
        assert self.tool.escape('He said "hi"\n') == '"He said \\"hi\\"\\n"'

    def test_escape_is_parseable(self):
        raw = 'tab\there "quoted" \\ back'
        assert json.loads(self.tool.escape(raw)) == raw

    def test_unescape_string(self):
        assert self.tool.unescape('"line\\nbreak"') == 'line\nbreak'

    def test_unescape_non_string_value(self):
        assert self.tool.unescape('{"a": 1}') == '{"a":1}'

    def test_unescape_invalid(self):
        with pytest.raises(JsonToolError, match='Invalid escaped string'):
            self.tool.unescape('"unterminated')


class TestProcessJson:

    def test_format_result(self):
        result = process_json('{"a":1}', 'format')
        assert result['success'] is True
        assert result['operation'] == 'format'

    def test_validate_failure(self):
        result = process_json('{', 'validate')
        assert result['success'] is False
        assert 'error' in result

    def test_validate_success(self):
        assert process_json('{}', 'validate')['result'] == VALID_MESSAGE

    def test_unsupported_operation(self):
        result = process_json('{}', 'explode')
        assert result['success'] is False
        assert result['error'] == 'Unsupported operation: explode'


class TestJsonEndpoint:

    def test_format(self, client):
        response = client.post('/api/json/process', json={'data': '{"a":1}', 'operation': 'format'})
        assert response.status_code == 200
        assert response.get_json()['result'] == '{\n  "a": 1\n}'

    def test_invalid_json(self, client):
        response = client.post('/api/json/process', json={'data': '{"a":', 'operation': 'minify'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid JSON'

    def test_escape_empty_string(self, client):
        response = client.post('/api/json/process', json={'data': '', 'operation': 'escape'})
        assert response.status_code == 200
        assert response.get_json()['result'] == '""'

    def test_empty_input(self, client):
        response = client.post('/api/json/process', json={'data': '  ', 'operation': 'format'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No input data provided'

    def test_no_body(self, client):
        response = client.post('/api/json/process', json={})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No data provided'

    def test_indent_as_digit_string(self, client):
        response = client.post('/api/json/process', json={
            'data': '{"a":1}', 'operation': 'format', 'indent': '4'
        })
        assert response.status_code == 200
        assert response.get_json()['result'] == '{\n    "a": 1\n}'

    @pytest.mark.parametrize('indent', ['tab', -2, [4], False])
    def test_bad_indent(self, client, indent):
        response = client.post('/api/json/process', json={
            'data': '{"a":1}', 'operation': 'format', 'indent': indent
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'indent must be a non-negative integer'
