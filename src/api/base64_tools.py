"""
Base64 tool backend.
"""

import base64
import binascii
import logging
import re
from typing import Any, Dict

from api.exceptions import Base64ToolError

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r'\s+')


def encode_base64(text: str, url_safe: bool = False) -> str:
    """Encode text as UTF-8 and return its Base64 form"""
    try:
        raw = text.encode('utf-8')
    except UnicodeEncodeError:
        # lone surrogates cannot be encoded
        raise Base64ToolError('Invalid input for Base64 encoding')
    encoded = base64.urlsafe_b64encode(raw) if url_safe else base64.b64encode(raw)
    return encoded.decode('ascii')


def decode_base64(text: str, url_safe: bool = False) -> str:
    """
    Decode a Base64 string.

    Whitespace is ignored and missing '=' padding is restored. Bytes that do
    not form UTF-8 come back one character per byte.
    """
    cleaned = _WHITESPACE_RE.sub('', text)
    if len(cleaned) % 4 == 1:
        raise Base64ToolError('Invalid Base64 string')
    cleaned += '=' * (-len(cleaned) % 4)

    try:
        if url_safe:
            cleaned = cleaned.replace('-', '+').replace('_', '/')
        raw = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        raise Base64ToolError('Invalid Base64 string')

    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        return raw.decode('latin-1')


def process_base64(data: str, operation: str, url_safe: bool = False) -> Dict[str, Any]:
    """Run 'encode' or 'decode' and wrap the outcome in a result dict"""
    try:
        if operation == 'encode':
            result = encode_base64(data, url_safe)
        elif operation == 'decode':
            result = decode_base64(data, url_safe)
        else:
            return {'success': False, 'error': f'Unsupported operation: {operation}'}
    except Base64ToolError as e:
        logger.debug("Base64 %s failed: %s", operation, e)
        return {'success': False, 'error': str(e), 'operation': operation}

    return {'success': True, 'result': result, 'operation': operation}
