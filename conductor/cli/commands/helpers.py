"""
Conductor CLI - Shared Helper Functions

Utility functions used across CLI commands.
"""

import keyword
import re
from pathlib import Path
from typing import List, Optional, Tuple

import click

from conductor.config import Config, DevConfig, ProdConfig

CONFIGS = {
    "default": Config,
    "dev": DevConfig,
    "prod": ProdConfig,
}


def resolve_config(name: str) -> type:
    """Config class for a ``--config`` choice, refreshed from the environment."""
    return CONFIGS[name.lower()].load_from_env()


def controllers_dir(app_dir: Path, config: type = Config) -> Path:
    return Path(app_dir) / config.Internal.CONTROLLERS_DIR_NAME


def is_conductor_project(app_dir: Path, config: type = Config) -> bool:
    """Check if ``app_dir`` has a controllers directory."""
    return controllers_dir(app_dir, config).is_dir()


def to_class_name(name: str) -> str:
    """
    Convert name to PascalCase class name.

    Examples:
        widgets -> Widgets
        blog_posts -> BlogPosts
        UserProfile -> UserProfile (preserves existing PascalCase)
    """
    name = name.lstrip('_')

    if not name:
        raise ValueError("Name cannot be empty or consist only of underscores")

    if re.search(r'[_\-\s]', name):
        words = name.replace('_', ' ').replace('-', ' ').split()
        class_name = ''.join(word[:1].upper() + word[1:] for word in words)
    else:
        class_name = name[0].upper() + name[1:]

    class_name = re.sub(r'[^\w]', '', class_name)

    if not class_name or not class_name[0].isalpha():
        raise ValueError(f"'{name}' cannot be converted to a valid class name (class names must start with a letter)")

    if not class_name.isidentifier() or keyword.iskeyword(class_name):
        raise ValueError(f"'{class_name}' is not a valid Python class name")

    return class_name


def to_module_name(class_name: str) -> str:
    """``BlogPosts`` -> ``blog_posts``."""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', class_name).lower()


def split_controller_name(name: str) -> Tuple[List[str], str]:
    """
    Split a dotted controller name into namespace folders and a class name.

    Examples:
        widgets -> ([], "Widgets")
        admin.users -> (["admin"], "Users")
    """
    parts = [part.strip() for part in name.strip().strip('.').split('.')]
    if not parts or not all(parts):
        raise ValueError(f"'{name}' is not a valid controller name")

    namespace = parts[:-1]
    for folder in namespace:
        if not folder.isidentifier() or keyword.iskeyword(folder):
            raise ValueError(f"Namespace segment '{folder}' is not a valid Python identifier")

    return namespace, to_class_name(parts[-1])


def validate_controller_name(text: str):
    """questionary validator: True or an error message."""
    try:
        split_controller_name(text)
    except ValueError as e:
        return str(e)
    return True


def parse_actions(value: Optional[str], prefix_whitelist: List[str]) -> List[Tuple[str, str]]:
    """
    Parse ``"get:show,post:create,index"`` into ``(prefix, action)`` pairs.

    Actions without a method prefix use the ``action`` fallback prefix.

    Raises:
        click.BadParameter: On unknown prefixes or invalid action names
    """
    pairs: List[Tuple[str, str]] = []
    for item in (value or "").split(','):
        item = item.strip()
        if not item:
            continue
        prefix, _, action = item.rpartition(':')
        prefix = (prefix or Config.Internal.ACTION_PREFIX).lower()
        if prefix not in prefix_whitelist:
            raise click.BadParameter(f"Unknown action prefix '{prefix}' (allowed: {', '.join(prefix_whitelist)})")
        if not action.isidentifier() or action.startswith('_'):
            raise click.BadParameter(f"'{action}' is not a valid action name")
        if (prefix, action) not in pairs:
            pairs.append((prefix, action))
    return pairs


def method_name(prefix: str, action: str) -> str:
    """``("get", "show")`` -> ``"get_show"``."""
    return f"{prefix}_{to_module_name(action)}"
