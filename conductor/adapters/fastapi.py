"""
FastAPI Adapter for Conductor

Forwards every request received by a FastAPI app to a Conductor Delegate.
"""

import logging
from pathlib import Path
from typing import Optional, Type

from fastapi import FastAPI, Request
from fastapi import Response as FastAPIResponse
from starlette.concurrency import run_in_threadpool

from conductor.config import Config
from conductor.core.delegate import Delegate
from conductor.response import Response
from conductor.utils import ensure_port_available, print_banner

logger = logging.getLogger(__name__)


class FastAPIAdapter:
    """
    Adapter to integrate Conductor routing with FastAPI.

    Controllers are synchronous, so the delegate runs in Starlette's
    threadpool.

    Example:
        app = FastAPI()
        adapter = FastAPIAdapter(app, app_dir="./app")
        adapter.register_routes()

        # Now you can run: uvicorn main:app --reload
    """

    def __init__(
        self,
        fastapi_app: FastAPI,
        app_dir: Path = Path("./app"),
        config: Optional[Type[Config]] = None,
        delegate: Optional[Delegate] = None,
    ):
        """
        Initialize the FastAPI adapter.

        Args:
            fastapi_app: FastAPI application instance
            app_dir: Path to the app directory containing controllers/
            config: Conductor configuration (optional)
            delegate: Pre-built Delegate (app_dir is ignored when given)
        """
        self.app = fastapi_app
        self.config = config or (delegate.config if delegate else Config)
        self.delegate = delegate or Delegate(app_dir=Path(app_dir), config=self.config)

    def register_routes(self) -> None:
        """Register the catch-all route that hands requests to the delegate."""
        methods = [method.upper() for method in self.config.Internal.SUPPORTED_HTTP_METHODS]
        self.app.api_route("/{path:path}", methods=methods, include_in_schema=False)(self._handle)

        if self.config.VERBOSE_LOGGING:
            logger.info(
                f"Registered {len(self.delegate.registry)} Conductor controllers with FastAPI: "
                f"{', '.join(self.delegate.registry.names())}"
            )

    async def _handle(self, request: Request, path: str):
        form = {}
        content_type = request.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            try:
                body = await request.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                form = body
        elif content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
            form = dict(await request.form())

        response = await run_in_threadpool(
            self.delegate.bootstrap,
            str(request.url),
            method=request.method,
            headers=dict(request.headers),
            form=form,
        )
        return self.to_fastapi_response(response)

    @staticmethod
    def to_fastapi_response(response: Response) -> FastAPIResponse:
        headers = response.headers
        media_type = headers.pop("Content-Type", None)
        return FastAPIResponse(
            content=response.text,
            status_code=response.status,
            headers=headers,
            media_type=media_type,
        )

    def run_server(self, project_name: Optional[str] = None, **uvicorn_kwargs) -> None:
        """
        Run the FastAPI application server with uvicorn.

        Args:
            project_name: Optional project name for display
            **uvicorn_kwargs: Additional uvicorn parameters (override config values)

        Examples:
            adapter.run_server()
            adapter.run_server(port=8080)
            adapter.run_server(workers=4, log_level="debug")
        """
        try:
            import uvicorn
        except ImportError:
            raise ImportError(
                "uvicorn is not installed. Install it with: pip install conductor[fastapi]"
            )

        uvicorn_config = {
            "host": getattr(self.config, 'HOST', '127.0.0.1'),
            "port": getattr(self.config, 'PORT', 7376),
            "reload": getattr(self.config, 'AUTO_RELOAD', False),
            **uvicorn_kwargs  # User kwargs take precedence
        }

        ensure_port_available(uvicorn_config["host"], uvicorn_config["port"])

        if not project_name:
            project_name = getattr(self.app, 'title', None) or "Conductor Application"
        print_banner(project_name, "FastAPI", uvicorn_config["port"])

        # uvicorn can only reload from an import string
        if uvicorn_config["reload"]:
            logger.warning("Auto-reload needs an import string (uvicorn main:app --reload); starting without it")
            uvicorn_config["reload"] = False

        uvicorn.run(self.app, **uvicorn_config)
