"""
Tests for the Base64 tool backend and its endpoint.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from api.base64_tools import decode_base64, encode_base64, process_base64
from api.exceptions import Base64ToolError


class TestEncode:

    def test_ascii(self):
        assert encode_base64('hello world') == 'aGVsbG8gd29ybGQ='

    def test_utf8(self):
        assert encode_base64('héllo') == 'aMOpbGxv'

    def test_url_safe(self):
        assert encode_base64('\xff\xfe', url_safe=True) == 'w7_Dvg=='
        assert encode_base64('\xff\xfe') == 'w7/Dvg=='

    def test_lone_surrogate(self):
        with pytest.raises(Base64ToolError, match='Invalid input for Base64 encoding'):
            encode_base64('\ud800')


class TestDecode:

    def test_ascii(self):
        assert decode_base64('aGVsbG8gd29ybGQ=') == 'hello world'

    def test_utf8(self):
        assert decode_base64('aMOpbGxv') == 'héllo'

    def test_missing_padding(self):
        assert decode_base64('aGVsbG8gd29ybGQ') == 'hello world'

    def test_embedded_whitespace(self):
        assert decode_base64('aGVs\nbG8g d29y\tbGQ=') == 'hello world'

    def test_url_safe(self):
        assert decode_base64('w7_Dvg==', url_safe=True) == '\xff\xfe'

    def test_binary_falls_back_to_latin1(self):
        assert decode_base64('/w==') == '\xff'

    @pytest.mark.parametrize('text', ['abcde', 'not base64!', 'a===', '****'])
    def test_invalid(self, text):
        with pytest.raises(Base64ToolError, match='Invalid Base64 string'):
            decode_base64(text)


class TestProcessBase64:

    def test_encode(self):
        assert process_base64('hi', 'encode') == {'success': True, 'result': 'aGk=', 'operation': 'encode'}

    def test_decode_failure(self):
        result = process_base64('!!', 'decode')
        assert result['success'] is False
        assert result['error'] == 'Invalid Base64 string'

    def test_unsupported_operation(self):
        assert process_base64('hi', 'rot13')['success'] is False


class TestBase64Endpoint:

    def test_encode(self, client):
        response = client.post('/api/base64/process', json={'data': 'hello world', 'operation': 'encode'})
        assert response.status_code == 200
        assert response.get_json()['result'] == 'aGVsbG8gd29ybGQ='

    def test_decode_invalid(self, client):
        response = client.post('/api/base64/process', json={'data': '%%%', 'operation': 'decode'})
        assert response.status_code == 400

    def test_empty_input(self, client):
        response = client.post('/api/base64/process', json={'data': '', 'operation': 'encode'})
        assert response.status_code == 400
