"""
SQL tool backend using sqlparse.
"""

import logging
import re
from typing import Any, Dict, Optional

import sqlparse
from sqlparse import tokens as T

from api.exceptions import SqlToolError

logger = logging.getLogger(__name__)

VALID_MESSAGE = '✓ Valid SQL syntax'
KEYWORD_CASES = ('upper', 'lower', 'capitalize', 'preserve')

_WHITESPACE_RE = re.compile(r'\s+')


class SqlFormatter:
    """Thin wrapper around sqlparse carrying the formatting settings."""

    def __init__(self, keyword_case: str = 'upper', indent_width: int = 2,
                 lines_between_queries: int = 2):
        if keyword_case not in KEYWORD_CASES:
            raise SqlToolError(f'Unsupported keyword case: {keyword_case}')
        self.keyword_case: Optional[str] = None if keyword_case == 'preserve' else keyword_case
        self.indent_width = indent_width
        self.lines_between_queries = lines_between_queries

    def format(self, sql: str) -> str:
        statements = [s for s in sqlparse.split(sql) if s.strip()]
        formatted = [
            sqlparse.format(
                statement,
                reindent=True,
                keyword_case=self.keyword_case,
                indent_width=self.indent_width,
            ).strip()
            for statement in statements
        ]
        separator = '\n' * (self.lines_between_queries + 1)
        return separator.join(formatted)

    def minify(self, sql: str) -> str:
        stripped = sqlparse.format(sql, strip_comments=True, keyword_case=self.keyword_case)
        return _WHITESPACE_RE.sub(' ', stripped).strip()

    def validate(self, sql: str) -> None:
        """Raise SqlToolError when the statement text cannot be tokenized cleanly"""
        if not sql.strip():
            raise SqlToolError('No SQL statement provided')

        depth = 0
        for statement in sqlparse.parse(sql):
            for token in statement.flatten():
                if token.ttype in T.Error:
                    if token.value in ("'", '"', '`'):
                        raise SqlToolError(f'Unterminated quoted string starting with {token.value}')
                    raise SqlToolError(f'Unexpected character {token.value!r}')
                if token.ttype in T.Punctuation:
                    if token.value == '(':
                        depth += 1
                    elif token.value == ')':
                        depth -= 1
                        if depth < 0:
                            raise SqlToolError('Unbalanced parentheses: unexpected ")"')
        if depth:
            raise SqlToolError('Unbalanced parentheses: missing ")"')


def process_sql(data: str, operation: str, keyword_case: str = 'upper', indent_width: int = 2,
                lines_between_queries: int = 2) -> Dict[str, Any]:
    """Run 'format', 'minify' or 'validate' and wrap the outcome in a result dict"""
    try:
        formatter = SqlFormatter(keyword_case, indent_width, lines_between_queries)
    except SqlToolError as e:
        return {'success': False, 'error': str(e)}

    try:
        if operation == 'format':
            result = formatter.format(data)
        elif operation == 'minify':
            result = formatter.minify(data)
        elif operation == 'validate':
            formatter.validate(data)
            result = VALID_MESSAGE
        else:
            return {'success': False, 'error': f'Unsupported operation: {operation}'}
    except SqlToolError as e:
        logger.debug("SQL %s failed: %s", operation, e)
        return {'success': False, 'error': str(e), 'operation': operation}
    except Exception as e:
        prefix = {'format': 'Error formatting SQL', 'minify': 'Error minifying SQL'}.get(operation, 'Invalid SQL')
        return {'success': False, 'error': f'{prefix}: {str(e)}', 'operation': operation}

    return {'success': True, 'result': result, 'operation': operation}
