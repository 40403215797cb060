from datetime import datetime
from typing import Any, Dict, Optional

from flask import Flask, jsonify

from config.settings import load_config, is_tool_enabled, get_enabled_tools
from config.tools import TOOLS
from blueprints.base64_tool import base64_tool_bp
from blueprints.html_tool import html_tool_bp
from blueprints.json_tool import json_tool_bp
from blueprints.sql_tool import sql_tool_bp
from blueprints.text_diff import text_diff_bp
from blueprints.timestamp import timestamp_bp

APP_NAME = "DevKit Tools"

TOOL_BLUEPRINTS = {
    "json-tool": json_tool_bp,
    "base64-tool": base64_tool_bp,
    "text-diff": text_diff_bp,
    "sql-tool": sql_tool_bp,
    "html-tool": html_tool_bp,
    "timestamp-tool": timestamp_bp,
}


def create_app(settings: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask app, registering a blueprint for every enabled tool"""
    app = Flask(__name__)
    app.config['TOOL_SETTINGS'] = settings if settings is not None else load_config()

    for tool_id, blueprint in TOOL_BLUEPRINTS.items():
        if is_tool_enabled(tool_id, app.config['TOOL_SETTINGS']):
            app.register_blueprint(blueprint)

    @app.route('/')
    def index():
        return jsonify({
            'name': APP_NAME,
            'tools': get_enabled_tools(TOOLS, app.config['TOOL_SETTINGS']),
        })

    @app.route('/api/tools')
    def api_tools():
        return jsonify({'tools': get_enabled_tools(TOOLS, app.config['TOOL_SETTINGS'])})

    @app.route('/health')
    def health():
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now().isoformat(),
            'tools_count': len(get_enabled_tools(TOOLS, app.config['TOOL_SETTINGS'])),
        })

    return app


app = create_app()
