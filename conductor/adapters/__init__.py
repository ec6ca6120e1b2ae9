"""
Conductor Adapters

Framework adapters for Flask and FastAPI.

Adapters are loaded lazily to avoid requiring all frameworks to be installed.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from conductor.adapters.fastapi import FastAPIAdapter
    from conductor.adapters.flask import FlaskAdapter


def __getattr__(name: str):
    """Lazy import adapters only when accessed."""
    if name == "FastAPIAdapter":
        try:
            from conductor.adapters.fastapi import FastAPIAdapter
            return FastAPIAdapter
        except ImportError as e:
            raise ImportError(
                "FastAPI is not installed. Install it with: pip install conductor[fastapi]"
            ) from e

    if name == "FlaskAdapter":
        from conductor.adapters.flask import FlaskAdapter
        return FlaskAdapter

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["FastAPIAdapter", "FlaskAdapter"]
