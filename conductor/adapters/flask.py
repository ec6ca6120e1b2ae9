"""
Flask Adapter for Conductor

Forwards every request received by a Flask app to a Conductor Delegate.
"""

import logging
from pathlib import Path
from typing import Optional, Type

from conductor.config import Config
from conductor.core.delegate import Delegate
from conductor.response import Response
from conductor.utils import ensure_port_available, print_banner, request_url

logger = logging.getLogger(__name__)


class FlaskAdapter:
    """
    Adapter to integrate Conductor routing with Flask.

    This adapter:
    1. Builds (or reuses) a Delegate for the app directory
    2. Registers a catch-all rule for every supported HTTP method
    3. Converts the Conductor Response into a Flask response

    Example:
        from flask import Flask
        from conductor import FlaskAdapter
        from config import DevConfig

        app = Flask(__name__)
        adapter = FlaskAdapter(app, app_dir="./app", config=DevConfig)
        adapter.register_routes()

        # Now you can run: python main.py
    """

    def __init__(
        self,
        flask_app,
        app_dir: Path = Path("./app"),
        config: Optional[Type[Config]] = None,
        delegate: Optional[Delegate] = None,
    ):
        """
        Initialize the Flask adapter.

        Args:
            flask_app: Flask application instance
            app_dir: Path to the app directory containing controllers/
            config: Conductor configuration (optional)
            delegate: Pre-built Delegate (app_dir is ignored when given)
        """
        try:
            from flask import request
            self.request = request
        except ImportError:
            raise ImportError(
                "Flask is not installed. Install it with: pip install conductor[flask]"
            )

        self.app = flask_app
        self.config = config or (delegate.config if delegate else Config)
        self.delegate = delegate or Delegate(app_dir=Path(app_dir), config=self.config)

    @property
    def methods(self):
        return [method.upper() for method in self.config.Internal.SUPPORTED_HTTP_METHODS]

    def register_routes(self) -> None:
        """Register the catch-all rules that hand requests to the delegate."""
        self.app.add_url_rule(
            "/",
            endpoint="conductor_root",
            view_func=self._handle,
            defaults={"path": ""},
            methods=self.methods,
        )
        self.app.add_url_rule(
            "/<path:path>",
            endpoint="conductor",
            view_func=self._handle,
            methods=self.methods,
        )

        if self.config.VERBOSE_LOGGING:
            logger.info(
                f"Registered {len(self.delegate.registry)} Conductor controllers with Flask: "
                f"{', '.join(self.delegate.registry.names())}"
            )

    def _handle(self, path: str = ""):
        request = self.request
        url = request_url(
            request.scheme,
            request.host,
            "/" + path,
            request.query_string.decode("utf-8", errors="replace"),
        )

        form = dict(request.form)
        if not form:
            json_body = request.get_json(silent=True)
            if isinstance(json_body, dict):
                form = json_body

        response = self.delegate.bootstrap(
            url,
            method=request.method,
            headers=dict(request.headers),
            form=form,
        )
        return self.to_flask_response(response)

    def to_flask_response(self, response: Response):
        """Convert a Conductor Response (status line phrase included)."""
        return self.app.response_class(
            response=response.text,
            status=f"{response.status} {response.reason_phrase}",
            headers=response.headers,
        )

    def run_server(self, project_name: Optional[str] = None, **flask_kwargs) -> None:
        """
        Run the Flask application server.

        Args:
            project_name: Optional project name for display
            **flask_kwargs: Additional Flask parameters (override config values)

        Examples:
            adapter.run_server()
            adapter.run_server(port=8080)
            adapter.run_server(debug=True, use_reloader=True)
        """
        flask_config = {
            "host": getattr(self.config, 'HOST', '127.0.0.1'),
            "port": getattr(self.config, 'PORT', 7376),
            "debug": getattr(self.config, 'DEBUG', False),
            **flask_kwargs  # User kwargs take precedence
        }

        ensure_port_available(flask_config["host"], flask_config["port"])

        if not project_name:
            project_name = getattr(self.app, 'name', None) or "Conductor Application"
        print_banner(project_name, "Flask", flask_config["port"])

        self.app.run(**flask_config)
