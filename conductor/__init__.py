"""
Conductor - A small MVC framework for Python backends

URLs are routed to controller classes by walking their path segments, then
to an action method by the verb-prefix convention (``getShow`` before
``actionShow``). REST controllers render their return values as JSON, XML,
CSV or native Python depending on the URL extension.

Minimal Quick Start:
    from conductor import Delegate, DevConfig

    delegate = Delegate(app_dir="./app", config=DevConfig)
    response = delegate.bootstrap("http://localhost/Widgets/show.json", method="GET")
    response.emit()

Serving with Flask:
    from flask import Flask
    from conductor import FlaskAdapter

    app = Flask(__name__)
    adapter = FlaskAdapter(app, app_dir="./app")
    adapter.register_routes()

    if __name__ == "__main__":
        adapter.run_server()

Full Import Guide:
    # Core
    from conductor import Controller, RestController, Delegate, Config

    # Errors
    from conductor.exceptions import NotFound, RouteNotFound, FormatError

    # Logging
    from conductor.logging import get_logger
"""

__version__ = "0.1.0"


from conductor.config import Config, DevConfig, ProdConfig
from conductor.core.base import Controller
from conductor.core.rest import RestController
from conductor.core.delegate import Delegate
from conductor.core.registry import ControllerRegistry
from conductor.exceptions import FormatError, HTTPStatusError, NotFound, Redirect, RouteNotFound
from conductor.request import Request
from conductor.response import Response
from conductor.url import URL, Path


# Lazy import for adapters (requires optional dependencies)
def __getattr__(name: str):
    """Lazy import adapters to avoid requiring optional dependencies."""
    if name == "FastAPIAdapter":
        from conductor.adapters import FastAPIAdapter
        return FastAPIAdapter

    elif name == "FlaskAdapter":
        from conductor.adapters import FlaskAdapter
        return FlaskAdapter

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Core
    "Controller",
    "RestController",
    "Delegate",
    "ControllerRegistry",
    "Config",
    "DevConfig",
    "ProdConfig",
    # Values
    "Request",
    "Response",
    "URL",
    "Path",
    # Errors
    "HTTPStatusError",
    "NotFound",
    "RouteNotFound",
    "FormatError",
    "Redirect",
    # Adapters
    "FastAPIAdapter",
    "FlaskAdapter",
    # Version
    "__version__",
]
