"""
Pytest Configuration for Conductor Tests

Ensures proper import paths for the conductor package during testing and
provides a throwaway app directory with a few controllers.
"""

import sys
import textwrap
from pathlib import Path

import pytest

# Add the parent directory to sys.path to ensure proper imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


MAIN_CONTROLLER = '''
from conductor import RestController


class MainController(RestController):
    def action_index(self, url, *attachments):
        return {"home": True}

    def action_exception(self, url, error, *attachments):
        return {"code": getattr(error, "code", 500), "message": str(error)}
'''

WIDGETS_CONTROLLER = '''
from conductor import RestController


class Widgets(RestController):
    def get_show(self, url, *attachments):
        return {"id": 5}

    def getWidgets(self, url, *attachments):
        return "get"

    def actionWidgets(self, url, *attachments):
        return "action"

    def get_list(self, url, *attachments):
        return [{"a": 1, "b": "x,y"}, {"a": 2, "b": "z"}]

    def get_user(self, url, *attachments):
        return {"user": {"name": "Sam"}}

    def post_create(self, url, *attachments):
        self.set_status(201)
        return {"created": self.request.post("name")}

    def get_search(self, url, *attachments):
        return {"q": self.request.get("q")}

    def get_broken(self, url, *attachments):
        raise RuntimeError("boom")

    def get_moved(self, url, *attachments):
        self.redirect("/Widgets/show")

    def get_attachments(self, url, *attachments):
        return {"count": len(attachments)}
'''

ADMIN_USERS_CONTROLLER = '''
from conductor import Controller


class Users(Controller):
    def action_index(self, url, *attachments):
        return "admin users"

    def get_show(self, url, *attachments):
        return "admin user"
'''


def write_controller(app_dir: Path, relative: str, source: str) -> Path:
    path = app_dir / "controllers" / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def app_dir(tmp_path):
    """App directory with MainController, Widgets and admin.Users."""
    app = tmp_path / "app"
    write_controller(app, "main_controller.py", MAIN_CONTROLLER)
    write_controller(app, "widgets.py", WIDGETS_CONTROLLER)
    write_controller(app, "admin/users.py", ADMIN_USERS_CONTROLLER)
    return app


@pytest.fixture
def delegate(app_dir):
    from conductor import Delegate
    return Delegate(app_dir=app_dir)
