"""
Base Classes for Conductor

Provides the controller classes that application controllers inherit from.
"""

from typing import Any, Dict, List, Optional, Sequence

from conductor.config import Config
from conductor.core.dispatcher import Dispatcher, build_action_table
from conductor.exceptions import Redirect
from conductor.request import Request
from conductor.response import Response


class Controller:
    """
    Base class for all controllers.

    Actions are public methods named ``{httpMethod}{Action}`` or
    ``action{Action}`` (snake_case spellings such as ``get_show`` work too).
    Each action receives the attachments positionally, the requested URL
    first.

    Example:
        class Widgets(Controller):
            def get_show(self, url):
                return "a widget"

            def action_index(self, url):
                return "all widgets"

    Optional hooks:
        will_handle_url(url, method_name): called before the action
        did_handle_url(url, method_name, response): called after formatting
    """

    _actions: Dict[str, str] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._actions = build_action_table(cls, reserved=_RESERVED_NAMES)

    def __init__(self, request: Optional[Request] = None, config: Optional[type] = None):
        self.request = request or Request()
        self.config = config or Config
        self._response: Optional[Response] = None
        self.initialize()

    def initialize(self) -> None:
        """Override to set up per-request state."""

    # Response handling

    @property
    def response(self) -> Response:
        if self._response is None:
            self._response = Response()
        return self._response

    def reset_response(self) -> None:
        self._response = None

    @property
    def status(self) -> int:
        return self.response.status

    @status.setter
    def status(self, code: int) -> None:
        self.response.status = code

    def set_status(self, code: int) -> None:
        self.response.status = code

    def set_header(self, key: str, value: Any) -> None:
        self.response.set_header(key, value)

    def clear_header(self, key: str) -> None:
        self.response.clear_header(key)

    def redirect(self, location: Any) -> None:
        """
        Stop the current action and answer with a redirect to ``location``.

        Raises:
            Redirect: Always; the delegate returns the carried response
        """
        response = self.response
        response.set_header("Location", str(location))
        if not 300 <= response.status < 400:
            response.status = 302
        response.body = None
        self.reset_response()
        raise Redirect(response)

    # Routing

    def method_prefixes(self) -> List[str]:
        """HTTP method of the current request, then the ``action`` fallback."""
        return [self.request.method or "cli", self.config.Internal.ACTION_PREFIX]

    @property
    def dispatcher(self) -> Dispatcher:
        return Dispatcher(self.method_prefixes())

    def can_route(self, action: str) -> bool:
        return self.dispatcher.can_route(self, action)

    def route(self, action: str, url: Any, attachments: Sequence[Any]) -> Response:
        return self.dispatcher.dispatch(self, action, url, attachments)

    def format_body(self, body: Any, attachments: Sequence[Any]) -> Any:
        """Hook for formatting the action's return value. Plain controllers stringify it."""
        if body is None:
            return None
        return str(body)

    @classmethod
    def actions(cls) -> List[str]:
        """Names of the routable methods defined on this controller."""
        return sorted(cls._actions.values())


_RESERVED_NAMES = frozenset(name for name in dir(Controller) if not name.startswith("__"))
