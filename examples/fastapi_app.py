"""
Example FastAPI Application using Conductor

Run with: uvicorn fastapi_app:app --reload
"""

from pathlib import Path

from fastapi import FastAPI

from conductor import Config, FastAPIAdapter


class ExampleConfig(Config):
    """Example configuration with custom settings"""
    HOST = "0.0.0.0"
    DEFAULT_FORMAT = "json"
    VERBOSE_LOGGING = True


app = FastAPI(title="Conductor + FastAPI Demo", version="0.1.0")

adapter = FastAPIAdapter(
    fastapi_app=app,
    app_dir=Path(__file__).parent / "app",
    config=ExampleConfig.load_from_env(),
)
adapter.register_routes()


if __name__ == "__main__":
    adapter.run_server()
