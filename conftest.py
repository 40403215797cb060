"""
pytest configuration for DevKit Tools.
Puts src on the import path and provides Flask test clients.
"""

import copy
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.absolute()
sys.path.insert(0, str(project_root / "src"))

from config.settings import DEFAULT_SETTINGS
from main import create_app


@pytest.fixture
def settings():
    """Default settings with the timestamp tool pinned to UTC."""
    values = copy.deepcopy(DEFAULT_SETTINGS)
    values['timestamp']['timezone'] = 'UTC'
    return values


@pytest.fixture
def client(settings):
    app = create_app(settings)
    app.config['TESTING'] = True
    return app.test_client()
