"""
Conductor Configuration

Central configuration for the Conductor framework.
"""

import os
import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "CONDUCTOR_"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_FORMATS = {"json", "xml", "csv", "native", "raw"}


class Config:
    """
    Framework configuration settings.

    Organized into:
    - Internal: Conductor framework internals (DO NOT MODIFY)
    - Env: Environment file configuration
    - User Settings: Configurable by developers
    """

    class Internal:
        """
        Conductor Framework Internal Configuration

        WARNING: THESE SETTINGS ARE PROTECTED AND CANNOT BE MODIFIED.
        Any attempt to override them in a subclass raises TypeError.
        """
        # Controller discovery
        CONTROLLERS_DIR_NAME = "controllers"
        ALLOWED_CONTROLLER_EXTENSIONS = [".py"]
        NAMESPACE_SEPARATOR = "."

        # Method dispatch
        ACTION_PREFIX = "action"  # Fallback prefix after the HTTP method
        DEFAULT_ACTION = "index"
        SUPPORTED_HTTP_METHODS = ["get", "post", "put", "delete", "patch", "head", "options"]

        # Schemes that receive formatted (json/xml/csv/native) bodies
        RENDERED_SCHEMES = ["http", "https", "exception"]

        # Ignore Patterns
        IGNORE_FOLDERS = ["__pycache__", ".git", "node_modules", "venv", ".venv"]
        IGNORE_FILES = ["__init__.py", "conftest.py"]

    class Env:
        """Environment file configuration"""
        file = ".env"
        auto_load = True
        override = True

    # User-Configurable Settings
    # ============================

    # Routing
    DEFAULT_CONTROLLER = "MainController"  # Serves "/" and exception:/ URLs
    EXCEPTION_ACTION = "exception"

    # Response formatting
    DEFAULT_FORMAT = "json"  # Used when the URL has no extension
    XML_ROOT_NAME = "data"

    # Framework Behavior
    DEBUG = False
    VERBOSE_LOGGING = True
    LOG_LEVEL = "INFO"

    # Server Configuration
    HOST = "127.0.0.1"
    PORT = 7376
    AUTO_RELOAD = False

    def __init_subclass__(cls, **kwargs):
        """Reject subclasses that try to replace Config.Internal."""
        super().__init_subclass__(**kwargs)

        if 'Internal' in cls.__dict__:
            raise TypeError(
                f"Cannot override Config.Internal in {cls.__name__}. "
                "Config.Internal contains framework-critical settings."
            )

    @staticmethod
    def _parse_env_value(env_value: str) -> Any:
        """Auto-detect the type of an environment value."""
        if env_value.lower() in ('null', 'none', '~', ''):
            return None

        if env_value.lower() in ('true', 'false', 'yes', 'no', 'on', 'off'):
            return env_value.lower() in ('true', 'yes', 'on')

        if env_value.lstrip('-').isdigit():
            return int(env_value)

        if ',' in env_value:
            return [item.strip() for item in env_value.split(',') if item.strip()]

        if '.' in env_value and env_value.replace('.', '', 1).lstrip('-').isdigit():
            return float(env_value)

        return env_value

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None):
        """
        Load configuration from .env file and environment variables.

        All environment variables must be prefixed with CONDUCTOR_*

        Args:
            env_file: Path to .env file (overrides Config.Env.file)

        Example .env file:
            CONDUCTOR_DEBUG=True
            CONDUCTOR_PORT=8000
            CONDUCTOR_DEFAULT_CONTROLLER=HomeController
            CONDUCTOR_DEFAULT_FORMAT=xml
        """
        env_path = Path(env_file or cls.Env.file)

        if cls.Env.auto_load:
            if env_path.exists():
                load_dotenv(env_path, override=cls.Env.override)
                if cls.VERBOSE_LOGGING:
                    logger.info(f"Loaded environment from: {env_path}")
            elif cls.VERBOSE_LOGGING:
                logger.info(f".env file not found: {env_path}")

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            attr_name = env_key[len(ENV_PREFIX):]

            if attr_name == 'INTERNAL' or hasattr(cls.Internal, attr_name):
                logger.warning(f"Cannot override internal framework setting: {env_key}")
                continue

            parsed_value = cls._parse_env_value(env_value)

            if attr_name == 'LOG_LEVEL':
                if not isinstance(parsed_value, str) or parsed_value.upper() not in VALID_LOG_LEVELS:
                    logger.warning(
                        f"Invalid LOG_LEVEL: {env_value}. "
                        f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}. "
                        f"Using default value."
                    )
                    continue
                parsed_value = parsed_value.upper()

            elif attr_name == 'PORT':
                if not isinstance(parsed_value, int) or not (1 <= parsed_value <= 65535):
                    logger.warning(
                        f"Invalid PORT: {env_value}. "
                        f"Must be between 1 and 65535. Using default value."
                    )
                    continue

            elif attr_name == 'DEFAULT_FORMAT':
                if not isinstance(parsed_value, str) or parsed_value.lower() not in VALID_FORMATS:
                    logger.warning(f"Invalid DEFAULT_FORMAT: {env_value}. Using default value.")
                    continue
                parsed_value = parsed_value.lower()

            setattr(cls, attr_name, parsed_value)

            if cls.VERBOSE_LOGGING:
                logger.info(f"Auto-set {attr_name} = {parsed_value} (from {env_key})")

        return cls

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration settings.

        Returns:
            True if configuration is valid

        Raises:
            ValueError: If a setting is invalid
        """
        if not cls.Internal.SUPPORTED_HTTP_METHODS:
            raise ValueError("Internal.SUPPORTED_HTTP_METHODS cannot be empty")

        if cls.LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}")

        if str(cls.DEFAULT_FORMAT).lower() not in VALID_FORMATS:
            raise ValueError(f"DEFAULT_FORMAT must be one of: {', '.join(sorted(VALID_FORMATS))}")

        if not cls.DEFAULT_CONTROLLER or not str(cls.DEFAULT_CONTROLLER).strip("/"):
            raise ValueError("DEFAULT_CONTROLLER cannot be empty")

        return True


class DevConfig(Config):
    """Development configuration with helpful defaults."""

    class Env:
        """Development environment configuration"""
        file = ".env.dev"
        auto_load = True
        override = True

    DEBUG = True
    VERBOSE_LOGGING = True
    LOG_LEVEL = "DEBUG"
    AUTO_RELOAD = True


class ProdConfig(Config):
    """Production configuration."""

    class Env:
        """Production environment configuration"""
        file = ".env.prod"
        auto_load = True
        override = False  # Don't override system env vars in production

    DEBUG = False
    VERBOSE_LOGGING = False
    LOG_LEVEL = "WARNING"
    HOST = "0.0.0.0"


# Default configuration
DEFAULT_CONFIG = Config
