#!/usr/bin/env python3
"""
Main entry point for the DevKit Tools application.
Adds the src directory to the import path and runs the Flask app defined there.
"""

import sys
import os
import argparse
import logging
from pathlib import Path

# Add the src directory to the Python path so we can import from it
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from main import app, APP_NAME


def main(argv=None):
    parser = argparse.ArgumentParser(description=f'{APP_NAME} Server')
    parser.add_argument('--port', '-p', type=int, default=8000,
                        help='Port to run the server on (default: 8000)')
    parser.add_argument('--host', default='127.0.0.1',
                        help='Host to bind to (default: 127.0.0.1)')
    parser.add_argument('--debug', action='store_true',
                        help='Run with the Flask debugger and debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Relative paths resolve against the project root
    os.chdir(project_root)

    try:
        print(f"Starting {APP_NAME} on http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=args.debug)
    except KeyboardInterrupt:
        print("\nServer stopped by user")


if __name__ == '__main__':
    main()
