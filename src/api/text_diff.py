"""
Diff tool backend.
Compares two texts as plain text, JSON or HTML. JSON and HTML inputs are
normalized by their formatters first so that layout differences vanish.
"""

import difflib
import html
import json
import logging
import re
from typing import Any, Dict, List, Tuple

from api.exceptions import DiffToolError
from api.html_tools import format_html
from api.json_tools import parse_json

logger = logging.getLogger(__name__)

DIFF_MODES = ('text', 'json', 'html')
OUTPUT_FORMATS = ('json', 'unified', 'context', 'stats-only')


def normalize_for_mode(text: str, mode: str) -> str:
    """Re-format the input so the diff only shows content changes"""
    if mode == 'text':
        return text
    try:
        if mode == 'json':
            return json.dumps(parse_json(text), indent=2, ensure_ascii=False)
        if mode == 'html':
            return format_html(text) if text.strip() else ''
    except Exception:
        raise DiffToolError(f'Invalid {mode.upper()} format')
    raise DiffToolError(f'Unsupported diff mode: {mode}')


def preprocess_texts(text1: str, text2: str, ignore_whitespace: bool, ignore_case: bool) -> Tuple[str, str]:
    if ignore_case:
        text1 = text1.lower()
        text2 = text2.lower()

    if ignore_whitespace:
        # collapse runs of spaces and tabs, keep line structure
        text1 = '\n'.join(re.sub(r'[ \t]+', ' ', line).strip() for line in text1.splitlines())
        text2 = '\n'.join(re.sub(r'[ \t]+', ' ', line).strip() for line in text2.splitlines())

    return text1, text2


def generate_unified_diff(text1: str, text2: str, context_lines: int = 3) -> str:
    diff = difflib.unified_diff(
        text1.splitlines(keepends=True), text2.splitlines(keepends=True),
        fromfile='left', tofile='right', n=context_lines
    )
    return ''.join(diff)


def generate_context_diff(text1: str, text2: str, context_lines: int = 3) -> str:
    diff = difflib.context_diff(
        text1.splitlines(keepends=True), text2.splitlines(keepends=True),
        fromfile='left', tofile='right', n=context_lines
    )
    return ''.join(diff)


def generate_character_diff_html(line1: str, line2: str) -> Tuple[str, str]:
    """Mark changed characters of two lines with spans. Content is HTML-escaped."""
    left: List[str] = []
    right: List[str] = []
    matcher = difflib.SequenceMatcher(None, line1, line2)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        chunk1 = html.escape(line1[i1:i2])
        chunk2 = html.escape(line2[j1:j2])
        if tag == 'equal':
            left.append(chunk1)
            right.append(chunk2)
            continue
        if chunk1:
            left.append(f'<span class="char-delete">{chunk1}</span>')
        if chunk2:
            right.append(f'<span class="char-insert">{chunk2}</span>')
    return ''.join(left), ''.join(right)


def generate_diff(text1: str, text2: str) -> Dict[str, Any]:
    """Line diff of two texts with character-level detail on modified lines"""
    lines1 = text1.splitlines()
    lines2 = text2.splitlines()
    matcher = difflib.SequenceMatcher(None, lines1, lines2)

    result_lines: List[Dict[str, Any]] = []
    stats = {'additions': 0, 'deletions': 0, 'equal': 0, 'modifications': 0}

    def deleted(i):
        stats['deletions'] += 1
        result_lines.append({'type': 'delete', 'content': lines1[i],
                             'line_num_1': i + 1, 'line_num_2': None})

    def inserted(j):
        stats['additions'] += 1
        result_lines.append({'type': 'insert', 'content': lines2[j],
                             'line_num_1': None, 'line_num_2': j + 1})

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            for offset in range(i2 - i1):
                stats['equal'] += 1
                result_lines.append({'type': 'equal', 'content': lines1[i1 + offset],
                                     'line_num_1': i1 + offset + 1, 'line_num_2': j1 + offset + 1})
        elif tag == 'delete':
            for i in range(i1, i2):
                deleted(i)
        elif tag == 'insert':
            for j in range(j1, j2):
                inserted(j)
        elif tag == 'replace':
            paired = min(i2 - i1, j2 - j1)
            for offset in range(paired):
                line1 = lines1[i1 + offset]
                line2 = lines2[j1 + offset]
                char_diff_1, char_diff_2 = generate_character_diff_html(line1, line2)
                stats['modifications'] += 1
                result_lines.append({
                    'type': 'modify',
                    'content_1': line1,
                    'content_2': line2,
                    'char_diff_1': char_diff_1,
                    'char_diff_2': char_diff_2,
                    'line_num_1': i1 + offset + 1,
                    'line_num_2': j1 + offset + 1,
                })
            for i in range(i1 + paired, i2):
                deleted(i)
            for j in range(j1 + paired, j2):
                inserted(j)

    return {'lines': result_lines, 'stats': stats}


def compare_texts(left: str, right: str, mode: str = 'text', output_format: str = 'json',
                  ignore_whitespace: bool = False, ignore_case: bool = False,
                  context_lines: int = 3) -> Dict[str, Any]:
    """
    Compare two inputs.

    Args:
        left, right: Texts to compare
        mode: 'text', 'json' or 'html'
        output_format: 'json' (structured lines), 'unified', 'context' or 'stats-only'
        ignore_whitespace: Collapse whitespace before comparing
        ignore_case: Case insensitive comparison
        context_lines: Context lines for unified and context output

    Returns:
        Dict with 'success', 'format', 'stats' and 'diff', or 'success' False and 'error'
    """
    if mode not in DIFF_MODES:
        return {'success': False, 'error': f'Unsupported diff mode: {mode}'}
    if output_format not in OUTPUT_FORMATS:
        return {'success': False, 'error': f'Unsupported output format: {output_format}'}

    try:
        left = normalize_for_mode(left, mode)
        right = normalize_for_mode(right, mode)
    except DiffToolError as e:
        logger.debug("Diff normalization failed: %s", e)
        return {'success': False, 'error': str(e)}

    processed_left, processed_right = preprocess_texts(left, right, ignore_whitespace, ignore_case)
    diff_result = generate_diff(processed_left, processed_right)

    result = {
        'success': True,
        'mode': mode,
        'format': output_format,
        'identical': processed_left == processed_right,
        'stats': diff_result['stats'],
    }
    if output_format == 'json':
        result['diff'] = diff_result['lines']
    elif output_format == 'unified':
        result['diff'] = generate_unified_diff(processed_left, processed_right, context_lines)
    elif output_format == 'context':
        result['diff'] = generate_context_diff(processed_left, processed_right, context_lines)
    return result
