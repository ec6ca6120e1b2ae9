"""
Controller Registry

Case-normalized routing table from fully-qualified controller names
(``admin.Widgets``) to controller classes. Built once at startup, either by
scanning a ``controllers/`` directory or by registering classes directly.
"""

import inspect
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from conductor.config import Config
from conductor.core.base import Controller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControllerEntry:
    """A registered controller class and where it was loaded from."""

    name: str
    controller_class: type
    source: Optional[Path] = None


class ControllerRegistry:
    """
    Registry of controller classes keyed by lower-cased dotted name.

    Example:
        registry = ControllerRegistry()
        registry.register(Widgets)                  # "widgets"
        registry.register(AdminUsers, "admin.Users")  # "admin.users"
        registry.lookup("ADMIN.users")              # -> ControllerEntry
    """

    def __init__(self, config: Optional[type] = None):
        self.config = config or Config
        self._entries: Dict[str, ControllerEntry] = {}

    @classmethod
    def from_directory(cls, app_dir: Path, config: Optional[type] = None) -> "ControllerRegistry":
        """Build a registry from ``app_dir/controllers``."""
        from conductor.core.loader import ControllerLoader

        registry = cls(config)
        controllers_dir = Path(app_dir) / registry.config.Internal.CONTROLLERS_DIR_NAME
        loader = ControllerLoader(controllers_dir, config=registry.config)
        for name, controller_class, source in loader.load_controllers():
            registry.register(controller_class, name=name, source=source)
        return registry

    def register(self, controller_class: type, name: Optional[str] = None, source: Optional[Path] = None) -> ControllerEntry:
        """
        Register ``controller_class`` under ``name`` (defaults to its class name).

        Raises:
            TypeError: If the class is not a concrete Controller subclass
            ValueError: If another class already uses the name
        """
        if not (inspect.isclass(controller_class) and issubclass(controller_class, Controller)):
            raise TypeError(f"{controller_class!r} is not a Controller subclass")
        if inspect.isabstract(controller_class):
            raise TypeError(f"{controller_class.__name__} is abstract and cannot be routed to")

        name = name or controller_class.__name__
        key = name.lower()

        existing = self._entries.get(key)
        if existing is not None and existing.controller_class is not controller_class:
            raise ValueError(
                f"Controller name '{name}' is already registered to "
                f"{existing.controller_class.__module__}.{existing.controller_class.__name__}"
            )

        entry = ControllerEntry(name=name, controller_class=controller_class, source=source)
        self._entries[key] = entry

        if self.config.VERBOSE_LOGGING:
            logger.info(f"Registered controller: {name} with actions: {controller_class.actions()}")

        return entry

    def lookup(self, name: str) -> Optional[ControllerEntry]:
        """Case-insensitive lookup of a dotted controller name."""
        return self._entries.get(name.lower())

    def mapping(self) -> Dict[str, Optional[Path]]:
        """Lower-cased name to source location."""
        return {key: entry.source for key, entry in self._entries.items()}

    def names(self) -> List[str]:
        return sorted((entry.name for entry in self._entries.values()), key=str.lower)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ControllerEntry]:
        return iter(sorted(self._entries.values(), key=lambda entry: entry.name.lower()))
