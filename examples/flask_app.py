"""
Example Flask Application using Conductor

Every request is forwarded to the controllers in ./app/controllers.
"""

from pathlib import Path

from flask import Flask

from conductor import DevConfig, FlaskAdapter
from conductor.logging import setup_logging_from_config

setup_logging_from_config(DevConfig)

app = Flask(__name__)

adapter = FlaskAdapter(app, app_dir=Path(__file__).parent / "app", config=DevConfig)
adapter.register_routes()


if __name__ == "__main__":
    adapter.run_server()
