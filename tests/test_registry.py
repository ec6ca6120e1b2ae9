"""
Unit tests for the controller registry and the controllers/ directory loader
"""

import abc
import logging

import pytest

from conductor import Controller, DevConfig, ProdConfig, RestController
from conductor.core.loader import ControllerLoader
from conductor.core.registry import ControllerRegistry

from conftest import write_controller


class Widgets(Controller):
    def action_index(self, url):
        return "widgets"


class OtherWidgets(Controller):
    def action_index(self, url):
        return "other"


def test_register_and_lookup():
    registry = ControllerRegistry()
    entry = registry.register(Widgets)
    assert entry.name == "Widgets"
    assert registry.lookup("widgets") is entry
    assert registry.lookup("WIDGETS").controller_class is Widgets
    assert "Widgets" in registry
    assert len(registry) == 1
    assert registry.names() == ["Widgets"]


def test_register_same_class_twice_is_allowed():
    registry = ControllerRegistry()
    registry.register(Widgets)
    registry.register(Widgets)
    assert len(registry) == 1


def test_register_conflicting_name():
    registry = ControllerRegistry()
    registry.register(Widgets)
    with pytest.raises(ValueError):
        registry.register(OtherWidgets, name="widgets")


def test_register_rejects_non_controllers():
    registry = ControllerRegistry()
    with pytest.raises(TypeError):
        registry.register(object)
    with pytest.raises(TypeError):
        registry.register(Widgets())


def test_register_rejects_abstract_controllers():
    class Base(Controller, abc.ABC):
        @abc.abstractmethod
        def action_index(self, url):
            pass

    with pytest.raises(TypeError):
        ControllerRegistry().register(Base)


def test_mapping_and_iteration():
    registry = ControllerRegistry()
    registry.register(Widgets, source=None)
    registry.register(OtherWidgets, name="admin.Other")
    assert registry.mapping() == {"widgets": None, "admin.other": None}
    assert [entry.name for entry in registry] == ["admin.Other", "Widgets"]


def test_from_directory(app_dir):
    registry = ControllerRegistry.from_directory(app_dir)
    assert registry.names() == ["admin.Users", "MainController", "Widgets"]

    entry = registry.lookup("admin.users")
    assert entry.source == app_dir / "controllers" / "admin" / "users.py"
    assert issubclass(entry.controller_class, Controller)
    assert entry.controller_class.actions() == ["action_index", "get_show"]


def test_imported_base_classes_are_not_registered(app_dir):
    registry = ControllerRegistry.from_directory(app_dir)
    assert "RestController" not in registry
    assert "Controller" not in registry
    assert issubclass(registry.lookup("widgets").controller_class, RestController)


def test_loader_requires_existing_directory(tmp_path):
    with pytest.raises(ValueError):
        ControllerLoader(tmp_path / "missing")


def test_loader_skips_ignored_and_broken_files(tmp_path, caplog):
    app = tmp_path / "app"
    write_controller(app, "good.py", """
        from conductor import Controller

        class Good(Controller):
            def action_index(self, url):
                return "good"
    """)
    write_controller(app, "broken.py", "class Broken(:\n")
    write_controller(app, "__init__.py", "")
    write_controller(app, "__pycache__/cached.py", "raise RuntimeError('never imported')\n")
    write_controller(app, "notes.txt", "not python")

    loader = ControllerLoader(app / "controllers")
    assert [path.name for path in loader.discover()] == ["broken.py", "good.py"]

    with caplog.at_level(logging.WARNING, logger="conductor.core.loader"):
        loaded = list(loader.load_controllers())

    assert [name for name, _, _ in loaded] == ["Good"]
    assert "broken.py" in caplog.text


def test_loader_rejects_paths_outside_directory(tmp_path):
    app = tmp_path / "app"
    (app / "controllers").mkdir(parents=True)
    outside = tmp_path / "outside.py"
    outside.write_text("x = 1\n")

    loader = ControllerLoader(app / "controllers")
    assert loader.load_module(outside) is None


def test_loader_rejects_non_identifier_module_names(tmp_path):
    app = tmp_path / "app"
    path = write_controller(app, "my-widgets.py", "x = 1\n")
    loader = ControllerLoader(app / "controllers")
    assert loader.load_module(path) is None


def test_module_names_are_namespaced(app_dir):
    loader = ControllerLoader(app_dir / "controllers")
    path = app_dir / "controllers" / "admin" / "users.py"
    assert loader.module_name_for(path) == "_conductor_app.controllers.admin.users"


@pytest.mark.parametrize("config, expected", [(ProdConfig, False), (DevConfig, True)])
def test_module_load_is_logged_only_when_verbose(tmp_path, caplog, config, expected):
    app = tmp_path / "app"
    path = write_controller(app, "quiet.py", "x = 1\n")
    loader = ControllerLoader(app / "controllers", config=config)

    with caplog.at_level(logging.INFO, logger="conductor.core.loader"):
        assert loader.load_module(path) is not None

    assert ("Successfully loaded module" in caplog.text) is expected
