"""
Conductor Core Module
"""

from conductor.core.base import Controller
from conductor.core.rest import RestController
from conductor.core.registry import ControllerRegistry
from conductor.core.loader import ControllerLoader
from conductor.core.router import Route, Router
from conductor.core.dispatcher import Dispatcher
from conductor.core.delegate import Delegate

__all__ = [
    "Controller",
    "RestController",
    "ControllerRegistry",
    "ControllerLoader",
    "Route",
    "Router",
    "Dispatcher",
    "Delegate",
]
