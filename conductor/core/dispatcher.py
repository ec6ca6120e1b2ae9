"""
Dispatcher Module

Finds and invokes controller actions using the verb-prefix convention:
for action ``show`` on a GET request the dispatcher tries ``getShow`` and
then ``actionShow``.

Action tables are built once per controller class (at class definition
time) rather than by reflecting over method names on every request.
Table keys are method names converted to camelCase and lower-cased, so
``get_show`` and ``getShow`` both satisfy the candidate ``getShow``.
Candidates are only lower-cased: underscores in the requested action are
kept, so ``s_h_o_w`` never reaches ``get_show``.
"""

import inspect
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence

from conductor.exceptions import RouteNotFound

if TYPE_CHECKING:
    from conductor.core.base import Controller
    from conductor.response import Response

logger = logging.getLogger(__name__)

# Optional controller hooks, never routable as actions
HOOK_NAMES = ("will_handle_url", "did_handle_url")


def normalize_method_name(name: str) -> str:
    """``"get_show"`` and ``"getShow"`` -> ``"getshow"``."""
    head, *rest = name.split("_")
    return (head + "".join(part[:1].upper() + part[1:] for part in rest)).lower()


def candidate_name(prefix: str, action: str) -> str:
    """``("GET", "show")`` -> ``"getShow"``."""
    return prefix.lower() + action[:1].upper() + action[1:]


def build_action_table(controller_class: type, reserved: Iterable[str] = ()) -> Dict[str, str]:
    """
    Map normalized method names to attribute names for ``controller_class``.

    Only public plain functions count. Names in ``reserved`` (the framework's
    own controller API) and the optional hooks are excluded. Subclass
    definitions win over inherited ones.
    """
    excluded = set(reserved) | set(HOOK_NAMES)
    table: Dict[str, str] = {}

    for klass in reversed(controller_class.__mro__):
        for name, attribute in vars(klass).items():
            if name.startswith("_") or name in excluded:
                continue
            if not inspect.isfunction(attribute):
                continue
            table[normalize_method_name(name)] = name

    return table


class Dispatcher:
    """
    Resolves and invokes an action method on a controller.

    Args:
        prefixes: Method prefixes in the order they are tried, usually the
            request's HTTP method followed by ``"action"``
    """

    def __init__(self, prefixes: Sequence[str]):
        self.prefixes: List[str] = [prefix.lower() for prefix in prefixes if prefix]

    def resolve(self, controller: "Controller", action: str) -> Optional[str]:
        """Return the attribute name of the matching action, or None."""
        if not action:
            return None
        table = type(controller)._actions
        for prefix in self.prefixes:
            method_name = table.get(candidate_name(prefix, action).lower())
            if method_name is not None:
                return method_name
        return None

    def can_route(self, controller: "Controller", action: str) -> bool:
        return self.resolve(controller, action) is not None

    def dispatch(self, controller: "Controller", action: str, url: Any, attachments: Sequence[Any]) -> "Response":
        """
        Invoke the action and return the controller's response.

        The controller's response slot is cleared before ``did_handle_url``
        runs, so the instance never carries state into another route.

        Raises:
            RouteNotFound: If no prefixed method matches ``action``
        """
        method_name = self.resolve(controller, action)
        if method_name is None:
            raise RouteNotFound(
                f"{type(controller).__name__} has no action for '{action}' "
                f"(tried prefixes: {', '.join(self.prefixes)})"
            )

        will_handle = getattr(controller, "will_handle_url", None)
        if callable(will_handle):
            will_handle(url, method_name)

        logger.debug(f"Dispatching {type(controller).__name__}.{method_name}")
        body = getattr(controller, method_name)(*attachments)

        response = controller.response
        response.body = controller.format_body(body, attachments)
        controller.reset_response()

        did_handle = getattr(controller, "did_handle_url", None)
        if callable(did_handle):
            did_handle(url, method_name, response)

        return response
