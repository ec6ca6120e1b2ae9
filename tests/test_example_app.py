"""
Smoke tests for the bundled example app in examples/app
"""

import json
from pathlib import Path

import pytest

from conductor import Delegate

EXAMPLE_APP = Path(__file__).parent.parent / "examples" / "app"


@pytest.fixture(scope="module")
def shop():
    return Delegate(app_dir=EXAMPLE_APP)


def test_home(shop):
    assert "message" in json.loads(shop.bootstrap("/").body)


def test_product_list_as_csv(shop):
    response = shop.bootstrap("/Products/list.csv", method="GET")
    assert response.header("Content-Type") == "text/csv"
    lines = response.body.split("\r\n")
    assert lines[0] == "id,name,price,in_stock"
    assert lines[2] == '2,"Bolt, hex",0.25,false'


def test_product_show_as_xml(shop):
    response = shop.bootstrap("/Products/show.xml?id=2", method="GET")
    assert response.body.endswith(
        "<product><id>2</id><name>Bolt, hex</name><price>0.25</price><instock>false</instock></product>"
    )


def test_missing_product(shop):
    response = shop.bootstrap("/Products/show?id=99", method="GET")
    assert response.status == 404
    assert json.loads(response.body)["error"]["message"] == "No product with id 99"


def test_create_requires_name(shop):
    assert shop.bootstrap("/Products/create", method="POST").status == 400
    created = shop.bootstrap("/Products/create", method="POST", form={"name": "Nut"})
    assert created.status == 201


def test_catalogue_redirects(shop):
    response = shop.bootstrap("/Products/catalogue")
    assert response.status == 302
    assert response.header("Location") == "/Products/list"


def test_plain_namespaced_controller(shop):
    response = shop.bootstrap("/admin/Orders")
    assert response.text == "No open orders"
    assert response.header("Content-Type") == "text/plain"
