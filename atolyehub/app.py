"""Application setup and the command that serves it."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Callable, Optional

from flask import Flask

from atolyehub.database import connect_db
from atolyehub.routes import create_api_blueprint

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def create_app(
    session_factory: Optional[Callable[[], Any]] = None, key: Optional[str] = None
) -> Flask:
    """Create the Flask application; connects to the database when no factory is given."""
    if session_factory is None:
        session_factory = connect_db()
    app = Flask(__name__)
    app.json.sort_keys = False
    app.json.ensure_ascii = False
    app.register_blueprint(create_api_blueprint(session_factory, key))
    return app


def main(argv: Optional[list[str]] = None) -> int:
    """Serve the API; returns 1 when the database cannot be reached."""
    parser = argparse.ArgumentParser(prog="atolyehub", description="Serve the activity API.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        app = create_app()
    except ConnectionError:
        return 1
    app.run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())