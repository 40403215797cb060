"""
Application settings.
Defaults below are overlaid with config.json from the config directory.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from api.timestamp import DEFAULT_LOCAL_DISPLAY_FORMAT

logger = logging.getLogger(__name__)

APP_ROOT = Path(__file__).parent.parent.parent

DEFAULT_SETTINGS: Dict[str, Any] = {
    "tools": {},
    "timestamp": {
        "timezone": None,
        "local_display_format": DEFAULT_LOCAL_DISPLAY_FORMAT,
    },
    "json": {"indent": 2},
    "sql": {
        "keyword_case": "upper",
        "indent_width": 2,
        "lines_between_queries": 2,
    },
    "html": {"indent": 2},
    "diff": {"context_lines": 3},
}


def get_config_directory() -> Path:
    """Get the config directory path."""
    config_dir = os.environ.get('DEVKIT_TOOLS_CONFIG_DIR')
    if config_dir:
        return Path(config_dir)
    return APP_ROOT / "config"


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load settings from config.json, falling back to defaults for anything missing"""
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    config_file = Path(config_file) if config_file else get_config_directory() / "config.json"
    if not config_file.exists():
        return settings

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_file, e)
        return settings

    if not isinstance(loaded, dict):
        logger.warning("Ignoring config file %s: top level must be an object", config_file)
        return settings

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(settings.get(section), dict):
            settings[section].update(values)
        else:
            settings[section] = values
    return settings


def is_tool_enabled(tool_id: str, settings: Dict[str, Any]) -> bool:
    """Check if a tool is enabled in config. Defaults to True if not specified."""
    tool_conf = settings.get('tools', {}).get(tool_id, {})
    return tool_conf.get('enabled', True)


def get_enabled_tools(tools_list: List[Dict[str, Any]], settings: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [tool for tool in tools_list if is_tool_enabled(tool['id'], settings)]
