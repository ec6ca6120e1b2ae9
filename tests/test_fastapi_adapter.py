"""
Tests for the FastAPI adapter using FastAPI's TestClient
"""

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi import FastAPI
from fastapi.testclient import TestClient

from conductor.adapters.fastapi import FastAPIAdapter


@pytest.fixture
def client(app_dir):
    app = FastAPI()
    adapter = FastAPIAdapter(app, app_dir=app_dir)
    adapter.register_routes()
    return TestClient(app)


def test_get_json(client):
    response = client.get("/Widgets/show.json")
    assert response.status_code == 200
    assert response.json() == {"id": 5}
    assert response.headers["content-type"] == "application/json"


def test_get_csv(client):
    response = client.get("/Widgets/list.csv")
    assert response.text == 'a,b\r\n1,"x,y"\r\n2,z'
    assert response.headers["content-type"].startswith("text/csv")


def test_root_goes_to_default_controller(client):
    assert client.get("/").json() == {"home": True}


def test_redirect_is_not_followed(client):
    response = client.get("/Widgets/moved", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/Widgets/show"


def test_json_post(client):
    response = client.post("/Widgets/create", json={"name": "gear"})
    assert response.status_code == 201
    assert response.json() == {"created": "gear"}


def test_form_post(client):
    response = client.post("/Widgets/create", data={"name": "bolt"})
    assert response.status_code == 201
    assert response.json() == {"created": "bolt"}


def test_query_string(client):
    assert client.get("/Widgets/search", params={"q": "nuts"}).json() == {"q": "nuts"}


def test_errors_are_rendered_by_exception_action(client):
    response = client.get("/Widgets/broken")
    assert response.status_code == 500
    assert response.json() == {"code": 500, "message": "boom"}
