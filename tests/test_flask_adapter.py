"""
Tests for the Flask adapter using Flask's test client
"""

import json

import pytest

flask = pytest.importorskip("flask")

from conductor import Delegate
from conductor.adapters.flask import FlaskAdapter


@pytest.fixture
def client(app_dir):
    app = flask.Flask(__name__)
    adapter = FlaskAdapter(app, app_dir=app_dir)
    adapter.register_routes()
    app.config["TESTING"] = True
    return app.test_client()


def test_get_json(client):
    response = client.get("/Widgets/show.json")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == '{"id":5}'
    assert response.headers["Content-Type"] == "application/json"


def test_root_goes_to_default_controller(client):
    response = client.get("/")
    assert json.loads(response.get_data(as_text=True)) == {"home": True}


def test_status_line_phrase_is_kept(client):
    response = client.get("/Widgets/moved")
    assert response.status == "302 Moved Temporarily"
    assert response.headers["Location"].endswith("/Widgets/show")


def test_form_post(client):
    response = client.post("/Widgets/create", data={"name": "gear"})
    assert response.status_code == 201
    assert response.get_data(as_text=True) == '{"created":"gear"}'


def test_json_post(client):
    response = client.post("/Widgets/create", json={"name": "bolt"})
    assert response.status_code == 201
    assert json.loads(response.get_data(as_text=True)) == {"created": "bolt"}


def test_query_string(client):
    response = client.get("/Widgets/search?q=nuts")
    assert json.loads(response.get_data(as_text=True)) == {"q": "nuts"}


def test_not_found(client):
    response = client.get("/Nothing/here")
    assert response.status_code == 404
    assert json.loads(response.get_data(as_text=True))["code"] == 404


def test_adapter_accepts_prebuilt_delegate(app_dir):
    delegate = Delegate(app_dir=app_dir)
    app = flask.Flask(__name__)
    adapter = FlaskAdapter(app, delegate=delegate)
    adapter.register_routes()

    assert adapter.delegate is delegate
    assert app.test_client().get("/admin/Users").get_data(as_text=True) == "admin users"
