"""
Router Module

Resolves URL path components to a controller instance and the remaining
components (the first of which is the action name).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from conductor.config import Config
from conductor.core.base import Controller
from conductor.core.registry import ControllerRegistry
from conductor.exceptions import NotFound
from conductor.request import Request

logger = logging.getLogger(__name__)


@dataclass
class Route:
    """A resolved controller and the path components it did not consume."""

    controller: Controller
    remaining: List[str] = field(default_factory=list)
    consumed: int = 0

    @property
    def action(self) -> Optional[str]:
        return self.remaining[0] if self.remaining else None


class Router:
    """
    Walks path components against the controller registry.

    Components are joined into a dotted name one at a time
    (``Admin`` -> ``Admin.Users`` -> ...) and looked up case-insensitively.
    The first prefix that names a controller wins; deeper matches sharing
    that prefix are never considered.
    """

    def __init__(self, registry: ControllerRegistry, config: Optional[type] = None):
        self.registry = registry
        self.config = config or registry.config or Config

    def resolve(self, components: Sequence[str], request: Optional[Request] = None) -> Route:
        """
        Resolve ``components`` to a fresh controller instance.

        Args:
            components: Path components, extension already removed
            request: Request context handed to the controller

        Raises:
            NotFound: If the list is empty or no prefix names a controller
        """
        if not components:
            raise NotFound("Cannot route an empty path")

        separator = self.config.Internal.NAMESPACE_SEPARATOR
        name: Optional[str] = None

        for index, component in enumerate(components):
            name = component if name is None else f"{name}{separator}{component}"
            entry = self.registry.lookup(name)
            if entry is None:
                continue

            controller = entry.controller_class(request, config=self.config)
            remaining = list(components[index + 1:])
            logger.debug(f"Resolved {'/'.join(components)} to {entry.name} (remaining: {remaining})")
            return Route(controller=controller, remaining=remaining, consumed=index + 1)

        raise NotFound(f"No controller matches /{'/'.join(components)}")
