"""
Controller Loader Module

Discovers and loads controller modules from the app/controllers directory.
"""

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterator, List, Optional, Tuple

from conductor.config import Config
from conductor.core.base import Controller

logger = logging.getLogger(__name__)

# Prefix for generated module names, keeps loaded controllers out of the
# way of real top-level packages
MODULE_PREFIX = "_conductor_app"

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


class ControllerLoader:
    """
    Loads controller modules from the filesystem.

    Every ``.py`` file under the controllers directory is a candidate.
    Sub-directories become namespace segments:

        controllers/
            widgets.py          class Widgets        -> "Widgets"
            admin/users.py      class Users          -> "admin.Users"
    """

    def __init__(self, controllers_dir: Path, config: Optional[type] = None):
        """
        Initialize the ControllerLoader.

        Args:
            controllers_dir: Path to the controllers directory (e.g., app/controllers)
            config: Configuration class (defaults to Config)

        Raises:
            ValueError: If the directory does not exist
        """
        self.config = config or Config
        self.controllers_dir = Path(controllers_dir).resolve()
        if not self.controllers_dir.is_dir():
            raise ValueError(f"Controllers directory does not exist: {controllers_dir}")
        self.allowed_extensions = set(self.config.Internal.ALLOWED_CONTROLLER_EXTENSIONS)

    def discover(self) -> List[Path]:
        """
        Recursively find controller files.

        Returns:
            Sorted list of controller file paths
        """
        discovered = []
        for path in self.controllers_dir.rglob("*"):
            if not path.is_file() or path.suffix.lower() not in self.allowed_extensions:
                continue
            relative = path.relative_to(self.controllers_dir)
            if any(part in self.config.Internal.IGNORE_FOLDERS for part in relative.parts[:-1]):
                continue
            if path.name in self.config.Internal.IGNORE_FILES:
                continue
            discovered.append(path)
        return sorted(discovered)

    def module_name_for(self, module_path: Path) -> str:
        relative = module_path.resolve().relative_to(self.controllers_dir).with_suffix("")
        return ".".join((MODULE_PREFIX, self.controllers_dir.name) + relative.parts)

    def load_module(self, module_path: Path) -> Optional[ModuleType]:
        """
        Load a Python module from a file path.

        Args:
            module_path: Path to the .py file to load

        Returns:
            The loaded module object, or None if the file was rejected
        """
        module_path = Path(module_path)

        try:
            if module_path.suffix.lower() not in self.allowed_extensions:
                raise ValueError(f"Disallowed file extension: {module_path.suffix}")

            if not self._is_safe_path(module_path):
                raise ValueError(f"Path escapes controllers directory: {module_path}")

            if module_path.stat().st_size > MAX_FILE_SIZE:
                raise ValueError(f"File too large: {module_path}")

            module_name = self.module_name_for(module_path)
            if not self._is_safe_module_name(module_name):
                raise ValueError(f"Unsafe module name: {module_name}")

            spec = importlib.util.spec_from_file_location(module_name, module_path)
            if spec is None or spec.loader is None:
                return None

            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except BaseException:
                sys.modules.pop(module_name, None)
                raise

            if self.config.VERBOSE_LOGGING:
                logger.info(f"Successfully loaded module: {module_name}")
            return module

        except (ImportError, SyntaxError, OSError, ValueError) as e:
            logger.warning(f"Failed to load controller module {module_path}: {e}")
            return None

    def controllers_in(self, module: ModuleType) -> List[type]:
        """Concrete Controller subclasses defined (not imported) in ``module``."""
        found = []
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if obj.__module__ != module.__name__:
                continue
            if issubclass(obj, Controller) and not inspect.isabstract(obj):
                found.append(obj)
        return found

    def load_controllers(self) -> Iterator[Tuple[str, type, Path]]:
        """
        Yield ``(dotted_name, controller_class, source_path)`` for every controller.
        """
        separator = self.config.Internal.NAMESPACE_SEPARATOR
        for path in self.discover():
            module = self.load_module(path)
            if module is None:
                continue
            namespace = path.relative_to(self.controllers_dir).parent.parts
            for controller_class in self.controllers_in(module):
                yield separator.join(namespace + (controller_class.__name__,)), controller_class, path

    def _is_safe_path(self, path: Path) -> bool:
        """The resolved path must stay inside the controllers directory."""
        if "\x00" in str(path):
            return False
        try:
            path.resolve(strict=True).relative_to(self.controllers_dir)
        except (OSError, ValueError, RuntimeError):
            return False
        return True

    def _is_safe_module_name(self, module_name: str) -> bool:
        return len(module_name) <= 255 and all(part.isidentifier() for part in module_name.split("."))
