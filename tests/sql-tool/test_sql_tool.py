"""
Tests for the SQL tool backend and its endpoint.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from api.exceptions import SqlToolError
from api.sql_tools import SqlFormatter, process_sql, VALID_MESSAGE


class TestSqlFormatter:

    def setup_method(self):
        self.formatter = SqlFormatter()

    def test_format_uppercases_and_breaks_clauses(self):
        result = self.formatter.format('select foo, bar from items where qty = 1')

        assert result.startswith('SELECT foo,')
        assert '\nFROM items' in result
        assert '\nWHERE qty = 1' in result

    def test_format_separates_statements(self):
        result = self.formatter.format('select 1; select 2;')

        assert result == 'SELECT 1;\n\n\nSELECT 2;'

    def test_lines_between_queries(self):
        result = SqlFormatter(lines_between_queries=0).format('select 1; select 2;')

        assert result == 'SELECT 1;\nSELECT 2;'

    def test_keyword_case_lower(self):
        result = SqlFormatter(keyword_case='lower').format('SELECT foo FROM items')

        assert result.startswith('select foo')
        assert 'from items' in result

    def test_keyword_case_preserve(self):
        result = SqlFormatter(keyword_case='preserve').format('Select foo From items')

        assert result.startswith('Select foo')

    def test_unsupported_keyword_case(self):
        with pytest.raises(SqlToolError):
            SqlFormatter(keyword_case='shouting')

    def test_minify(self):
        sql = 'select foo -- pick foo\nfrom   items\n\nwhere qty=1'

        assert self.formatter.minify(sql) == 'SELECT foo FROM items WHERE qty=1'

    def test_validate_ok(self):
        self.formatter.validate("SELECT (foo + bar) FROM items WHERE label = 'x'")

    def test_validate_empty(self):
        with pytest.raises(SqlToolError):
            self.formatter.validate('   ')

    def test_validate_missing_paren(self):
        with pytest.raises(SqlToolError, match='missing'):
            self.formatter.validate('SELECT (foo + bar FROM items')

    def test_validate_extra_paren(self):
        with pytest.raises(SqlToolError, match='unexpected'):
            self.formatter.validate('SELECT foo) FROM items')

    def test_validate_unterminated_string(self):
        with pytest.raises(SqlToolError, match='Unterminated'):
            self.formatter.validate("SELECT 'abc FROM items")


class TestProcessSql:

    def test_validate(self):
        assert process_sql('select 1', 'validate')['result'] == VALID_MESSAGE

    def test_validate_failure(self):
        result = process_sql('select (1', 'validate')
        assert result['success'] is False

    def test_bad_keyword_case(self):
        assert process_sql('select 1', 'format', keyword_case='nope')['success'] is False

    def test_unsupported_operation(self):
        assert process_sql('select 1', 'explain')['success'] is False


class TestSqlEndpoint:

    def test_format(self, client):
        response = client.post('/api/sql/process', json={'data': 'select 1', 'operation': 'format'})
        assert response.status_code == 200
        assert response.get_json()['result'] == 'SELECT 1'

    def test_minify(self, client):
        response = client.post('/api/sql/process', json={'data': 'select\n  1', 'operation': 'minify'})
        assert response.get_json()['result'] == 'SELECT 1'

    def test_invalid(self, client):
        response = client.post('/api/sql/process', json={'data': 'select (1', 'operation': 'validate'})
        assert response.status_code == 400

    def test_empty_input(self, client):
        response = client.post('/api/sql/process', json={'data': '', 'operation': 'format'})
        assert response.status_code == 400
