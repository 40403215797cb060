"""
JSON tool backend.
Format, minify, validate, escape and unescape JSON text.
"""

import json
import logging
from typing import Any, Dict

from api.exceptions import JsonToolError

logger = logging.getLogger(__name__)

VALID_MESSAGE = '✓ Valid JSON'
OPERATIONS = ('format', 'minify', 'validate', 'escape', 'unescape')


def _reject_constant(name: str):
    raise ValueError(f'Unexpected token {name}')


def parse_json(text: str) -> Any:
    """Parse strict JSON. NaN and Infinity are not JSON and are rejected."""
    return json.loads(text, parse_constant=_reject_constant)


def describe_json_error(error: Exception) -> Dict[str, Any]:
    """Turn a decode error into a message with line and column when available"""
    if isinstance(error, json.JSONDecodeError):
        return {
            'error': f'{error.msg} at line {error.lineno} column {error.colno}',
            'line': error.lineno,
            'column': error.colno,
        }
    return {'error': str(error)}


class JsonTool:
    """JSON operations. Every method takes and returns text."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, text: str, sort_keys: bool = False) -> str:
        try:
            data = parse_json(text)
        except ValueError:
            raise JsonToolError('Invalid JSON')
        return json.dumps(data, indent=self.indent, ensure_ascii=False, sort_keys=sort_keys)

    def minify(self, text: str) -> str:
        try:
            data = parse_json(text)
        except ValueError:
            raise JsonToolError('Invalid JSON')
        return json.dumps(data, separators=(',', ':'), ensure_ascii=False)

    def validate(self, text: str) -> Dict[str, Any]:
        try:
            parse_json(text)
        except ValueError as e:
            return {'valid': False, **describe_json_error(e)}
        return {'valid': True, 'message': VALID_MESSAGE}

    def escape(self, text: str) -> str:
        """Encode raw text as a JSON string literal"""
        return json.dumps(text, ensure_ascii=False)

    def unescape(self, text: str) -> str:
        """Decode a JSON string literal. Other JSON values come back minified."""
        try:
            value = parse_json(text)
        except ValueError:
            raise JsonToolError('Invalid escaped string')
        if isinstance(value, str):
            return value
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def process_json(data: str, operation: str, indent: int = 2, sort_keys: bool = False) -> Dict[str, Any]:
    """
    Run a JSON operation.

    Args:
        data: Input text
        operation: One of 'format', 'minify', 'validate', 'escape', 'unescape'
        indent: Indent width used by 'format'
        sort_keys: Sort object keys when formatting

    Returns:
        Dict with 'success', 'result' and 'operation', or 'success' False and 'error'
    """
    if operation not in OPERATIONS:
        return {'success': False, 'error': f'Unsupported operation: {operation}'}

    tool = JsonTool(indent=indent)
    try:
        if operation == 'format':
            result = tool.format(data, sort_keys=sort_keys)
        elif operation == 'minify':
            result = tool.minify(data)
        elif operation == 'validate':
            validation = tool.validate(data)
            if not validation['valid']:
                return {'success': False, 'operation': operation, **validation}
            result = validation['message']
        elif operation == 'escape':
            result = tool.escape(data)
        else:
            result = tool.unescape(data)
    except JsonToolError as e:
        logger.debug("JSON %s failed: %s", operation, e)
        return {'success': False, 'error': str(e), 'operation': operation}

    return {'success': True, 'result': result, 'operation': operation}
