"""
HTML tool backend.
Pretty-printing is delegated to BeautifulSoup; validation walks the markup
with the standard library tokenizer and checks tag nesting.
"""

import html
import logging
import re
from html.parser import HTMLParser
from typing import Any, Dict, List

from bs4 import BeautifulSoup
from bs4.formatter import HTMLFormatter

from api.exceptions import HtmlToolError

logger = logging.getLogger(__name__)

VALID_MESSAGE = '✓ Valid HTML'

VOID_ELEMENTS = {
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
}

# Elements whose end tag may be omitted
OPTIONAL_END_ELEMENTS = {
    'html', 'head', 'body', 'p', 'li', 'dt', 'dd', 'tr', 'td', 'th',
    'thead', 'tbody', 'tfoot', 'option', 'optgroup', 'colgroup',
    'caption', 'rt', 'rp',
}


def _require_markup(markup: str) -> None:
    if not markup or not markup.strip():
        raise HtmlToolError('No HTML provided')


def format_html(markup: str, indent: int = 2) -> str:
    _require_markup(markup)
    soup = BeautifulSoup(markup, 'html.parser')
    return soup.prettify(formatter=HTMLFormatter(indent=indent))


def minify_html(markup: str) -> str:
    """Collapse whitespace, drop whitespace between tags and strip comments"""
    _require_markup(markup)
    minified = re.sub(r'\s+', ' ', markup)
    minified = re.sub(r'>\s+<', '><', minified)
    minified = re.sub(r'<!--[\s\S]*?-->', '', minified)
    return minified.strip()


class TagBalanceChecker(HTMLParser):
    """Collects nesting problems: stray end tags and unclosed elements."""

    def __init__(self):
        super().__init__()
        self.stack: List[tuple] = []
        self.errors: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag not in VOID_ELEMENTS:
            self.stack.append((tag, self.getpos()))

    def handle_startendtag(self, tag, attrs):
        pass

    def handle_endtag(self, tag):
        if tag in VOID_ELEMENTS:
            return
        open_tags = [name for name, _ in self.stack]
        if tag not in open_tags:
            line, col = self.getpos()
            self.errors.append(f'Unexpected closing tag </{tag}> at line {line}, column {col + 1}')
            return
        while self.stack:
            name, (line, col) = self.stack.pop()
            if name == tag:
                break
            if name not in OPTIONAL_END_ELEMENTS:
                self.errors.append(f'Unclosed <{name}> opened at line {line}, column {col + 1}')

    def close(self):
        super().close()
        for name, (line, col) in self.stack:
            if name not in OPTIONAL_END_ELEMENTS:
                self.errors.append(f'Unclosed <{name}> opened at line {line}, column {col + 1}')
        self.stack = []


def check_html(markup: str) -> List[str]:
    """Return every nesting problem found in the markup"""
    if not markup.strip():
        return ['No HTML provided']
    checker = TagBalanceChecker()
    checker.feed(markup)
    checker.close()
    return checker.errors


def process_html(data: str, operation: str, indent: int = 2) -> Dict[str, Any]:
    """Run 'format', 'minify' or 'validate' and wrap the outcome in a result dict"""
    if operation == 'validate':
        errors = check_html(data)
        if errors:
            return {'success': False, 'error': errors[0], 'errors': errors, 'operation': operation}
        return {'success': True, 'result': VALID_MESSAGE, 'operation': operation}

    try:
        if operation == 'format':
            result = format_html(data, indent)
        elif operation == 'minify':
            result = minify_html(data)
        else:
            return {'success': False, 'error': f'Unsupported operation: {operation}'}
    except HtmlToolError as e:
        return {'success': False, 'error': str(e), 'operation': operation}
    except Exception as e:
        logger.debug("HTML %s failed: %s", operation, e)
        return {'success': False, 'error': f'Invalid HTML: {str(e)}', 'operation': operation}

    return {
        'success': True,
        'result': result,
        'escaped': html.escape(result),
        'operation': operation,
    }
