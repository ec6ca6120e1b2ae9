"""
Delegate Module

The application object. A Delegate owns the controller registry, filters
incoming URLs, routes them to controllers and turns failures into
responses by re-routing them as ``exception:/{code}`` URLs.
"""

import dataclasses
import logging
import traceback
from pathlib import Path
from typing import Any, Iterable, List, Optional

from conductor.config import Config
from conductor.core.registry import ControllerRegistry
from conductor.core.router import Router
from conductor.exceptions import Redirect, RouteNotFound, status_code_of
from conductor.request import Request
from conductor.response import Response
from conductor.url import URL

logger = logging.getLogger(__name__)


class Delegate:
    """
    Routes URLs to controllers and produces responses.

    Example:
        delegate = Delegate(app_dir="./app", config=DevConfig)
        response = delegate.bootstrap("http://localhost/Widgets/show.json", method="GET")
        response.emit()

    Subclasses customise routing by overriding ``filter_url`` and add
    values for every action with ``attach``.
    """

    def __init__(
        self,
        app_dir: Optional[Path] = None,
        registry: Optional[ControllerRegistry] = None,
        config: Optional[type] = None,
    ):
        """
        Initialize the Delegate.

        Args:
            app_dir: App directory containing controllers/ (ignored if a
                registry is given)
            registry: Pre-built controller registry
            config: Configuration class (defaults to Config)
        """
        self.config = config or Config
        if registry is None:
            if app_dir is not None:
                registry = ControllerRegistry.from_directory(Path(app_dir), config=self.config)
            else:
                registry = ControllerRegistry(config=self.config)
        self.registry = registry
        self.router = Router(self.registry, config=self.config)
        self._attachments: List[Any] = []

    @property
    def default_controller(self) -> str:
        return str(self.config.DEFAULT_CONTROLLER).strip("/")

    def attach(self, attachment: Any) -> None:
        """Append a value passed to every routed action after the URL."""
        self._attachments.append(attachment)

    def filter_url(self, url: URL) -> URL:
        """
        Rewrite a URL before routing.

        The home page (no path components) goes to the default controller and
        ``exception:/{code}`` URLs go to its exception action. Everything else
        is left as is.
        """
        components = url.path.components
        if not components:
            return url.with_path(f"/{self.default_controller}")
        if url.scheme == "exception" and len(components) == 1:
            return url.with_path(f"/{self.default_controller}/{self.config.EXCEPTION_ACTION}")
        return url

    def response_for_url(
        self,
        url: "str | URL",
        attachments: Iterable[Any] = (),
        request: Optional[Request] = None,
    ) -> Response:
        """
        Route ``url`` to a controller action and return its response.

        Attachments passed to the action are the unfiltered URL, then
        ``attachments``, then the delegate's own attachments.

        Raises:
            NotFound: If no controller matches the filtered path
            RouteNotFound: If the controller has no matching action
            HTTPStatusError: 400 if ``url`` cannot be parsed
        """
        url = URL.parse(url)
        if request is None:
            request = Request(url=url)
        elif request.url != url:
            request = dataclasses.replace(request, url=url)

        arguments = [url, *attachments]

        filtered_path = self.filter_url(url).path.without_extension()
        route = self.router.resolve(filtered_path.components, request)

        action = route.action or self.config.Internal.DEFAULT_ACTION
        if not route.controller.can_route(action):
            raise RouteNotFound(f"{type(route.controller).__name__} cannot route '{action}'")

        arguments.extend(self._attachments)
        return route.controller.route(action, url, arguments)

    def response_for_exception(self, exception: BaseException, request: Optional[Request] = None) -> Response:
        """
        Build a response for ``exception``.

        The exception is re-routed as ``exception:/{code}`` with itself as an
        attachment. If that fails too, a plain response carrying the
        exception text is returned. Either way the status is the
        exception's code.
        """
        code = status_code_of(exception)
        try:
            response = self.response_for_url(URL.exception(code), [exception], request=request)
        except Redirect as redirect:
            return redirect.response
        except Exception as e:
            logger.warning(f"Exception handler for {code} failed ({type(e).__name__}: {e}), using fallback response")
            response = Response(self._fallback_body(exception))
        response.status = code
        return response

    def _fallback_body(self, exception: BaseException) -> str:
        if self.config.DEBUG:
            return "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
        return str(exception)

    def bootstrap(self, url: "str | URL", method: Optional[str] = None, **request_options) -> Response:
        """
        Produce the response for one request. Never raises for routing or
        action failures.

        Args:
            url: Requested URL
            method: HTTP method (``"cli"`` when omitted)
            **request_options: Extra Request fields (headers, form)
        """
        request = None
        try:
            request = Request.create(url, method, **request_options)
            return self.response_for_url(request.url, request=request)
        except Redirect as redirect:
            return redirect.response
        except Exception as e:
            code = status_code_of(e)
            target = request.url if request is not None else url
            if code >= 500:
                logger.error(f"Unhandled error for {target}: {e}", exc_info=True)
            else:
                logger.info(f"{code} for {target}: {e}")
            return self.response_for_exception(e, request)
