# Store for tools configuration
TOOLS = [
    {
        "id": "json-tool",
        "name": "JSON Tool",
        "description": "Format, minify, validate, escape and unescape JSON data",
        "path": "/api/json/process",
        "tags": ["formatter", "json", "validator", "escape"],
        "operations": ["format", "minify", "validate", "escape", "unescape"],
        "icon": "📄"
    },
    {
        "id": "base64-tool",
        "name": "Base64 Encoder/Decoder",
        "description": "Encode text to Base64 and decode Base64 back to text",
        "path": "/api/base64/process",
        "tags": ["base64", "encoder", "decoder"],
        "operations": ["encode", "decode"],
        "icon": "🔐"
    },
    {
        "id": "text-diff",
        "name": "Diff Tool",
        "description": "Compare two texts, JSON documents or HTML fragments line by line",
        "path": "/api/text-diff/compare",
        "tags": ["diff", "compare", "text", "json", "html"],
        "operations": ["compare"],
        "icon": "⚖️"
    },
    {
        "id": "sql-tool",
        "name": "SQL Formatter",
        "description": "Format, minify and validate SQL statements",
        "path": "/api/sql/process",
        "tags": ["sql", "formatter", "database"],
        "operations": ["format", "minify", "validate"],
        "icon": "🗄️"
    },
    {
        "id": "html-tool",
        "name": "HTML Formatter",
        "description": "Pretty-print, minify and validate HTML markup",
        "path": "/api/html/process",
        "tags": ["html", "formatter", "minifier", "validator"],
        "operations": ["format", "minify", "validate"],
        "icon": "🌐"
    },
    {
        "id": "timestamp-tool",
        "name": "Timestamp Converter",
        "description": "Convert between local date-time, Unix seconds and Unix milliseconds",
        "path": "/api/timestamp/apply",
        "tags": ["timestamp", "unix", "epoch", "time", "date"],
        "operations": ["edit_local", "edit_seconds", "edit_millis", "use_now", "clear_field", "reset"],
        "icon": "⏰"
    }
]
