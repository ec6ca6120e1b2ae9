"""
Unit tests for response formatting (JSON, XML, CSV, native, raw)
"""

import pickle
from dataclasses import dataclass

import pytest

from conductor.exceptions import FormatError
from conductor.formatters import (
    Format,
    ResponseFormatter,
    csv_encode,
    json_encode,
    native_encode,
    primitive_of,
    singular_of,
    xml_encode,
)
from conductor.response import Response
from conductor.url import URL


XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y
        self._secret = "hidden"


class Money:
    def as_dict(self):
        return {"amount": 10, "currency": "EUR"}


@dataclass
class Tagged:
    name: str
    tags: tuple


# Normalization

def test_primitive_of_objects():
    assert primitive_of(Point(1, 2)) == {"x": 1, "y": 2}
    assert primitive_of(Money()) == {"amount": 10, "currency": "EUR"}
    assert primitive_of(Tagged("a", ("x", "y"))) == {"name": "a", "tags": ["x", "y"]}
    assert primitive_of({"set": {1}}) == {"set": [1]}


def test_primitive_of_rejects_cycles():
    data = {"a": []}
    data["a"].append(data)
    with pytest.raises(FormatError):
        primitive_of(data)


def test_primitive_of_allows_shared_references():
    shared = {"id": 1}
    assert primitive_of([shared, shared]) == [{"id": 1}, {"id": 1}]


# JSON

def test_json_is_compact():
    assert json_encode({"id": 5, "tags": ["a", "b"]}) == '{"id":5,"tags":["a","b"]}'


def test_json_rejects_nan():
    with pytest.raises(FormatError):
        json_encode(float("nan"))


# XML

def test_xml_single_key_unwrap():
    assert xml_encode({"user": {"name": "Sam"}}) == XML_DECLARATION + "<user><name>Sam</name></user>"


def test_xml_numeric_keys_use_singular_of_parent():
    document = xml_encode({"users": ["Ann", "Bob"], "count": 2}, root_name="result")
    assert document == (
        XML_DECLARATION
        + "<result><users><user>Ann</user><user>Bob</user></users><count>2</count></result>"
    )


def test_xml_escapes_text_and_strips_keys():
    document = xml_encode({"note": "a < b & c", "first_name!": "Jo"}, root_name="data")
    assert "<note>a &lt; b &amp; c</note>" in document
    assert "<firstname>Jo</firstname>" in document


@pytest.mark.parametrize("data", [
    {"note": "bell\x07"},
    {"notes": ["ok", "nul\x00"]},
    "\x1b[31m",
])
def test_xml_rejects_characters_outside_xml_1_0(data):
    with pytest.raises(FormatError):
        xml_encode(data, root_name="data")


def test_xml_keeps_tabs_newlines_and_unicode():
    document = xml_encode({"note": "a\tb\nc é 😀"}, root_name="data")
    assert document.endswith("<note>a\tb\nc é 😀</note>")


def test_xml_none_and_booleans():
    document = xml_encode({"empty": None, "ok": True}, root_name="flags")
    assert document == XML_DECLARATION + "<flags><empty /><ok>true</ok></flags>"


def test_singular_of():
    assert singular_of("users") == "user"
    assert singular_of("categories") == "category"
    assert singular_of("boxes") == "box"
    assert singular_of("people") == "person"
    assert singular_of("news") == "news"
    assert singular_of("data") == "datum"
    assert singular_of("item") == "item"


# CSV

def test_csv_rows():
    assert csv_encode([{"a": 1, "b": "x,y"}, {"a": 2, "b": "z"}]) == 'a,b\r\n1,"x,y"\r\n2,z'


def test_csv_single_record_is_one_row():
    assert csv_encode({"name": "Sam", "active": False, "nick": None}) == "name,active,nick\r\nSam,false,null"


def test_csv_quotes_and_skips_nested_fields():
    rows = [{"text": 'say "hi"', "nested": {"x": 1}, "n": 1}]
    assert csv_encode(rows) == 'text,n\r\n"say ""hi""",1'


def test_csv_header_comes_from_first_row_only():
    rows = [{"a": 1}, {"a": 2, "b": 3}]
    assert csv_encode(rows) == "a\r\n1\r\n2,3"


def test_csv_scalar():
    assert csv_encode(42) == "42"


# Native

def test_native_source_rebuilds_value():
    source = native_encode({"id": 5, "tags": ("a",)})
    assert source.startswith("import pickle\n")
    namespace = {}
    exec(source, namespace)
    assert namespace["data"] == {"id": 5, "tags": ("a",)}


def test_native_rejects_unpicklable():
    with pytest.raises(FormatError):
        native_encode({"fn": lambda: None})


# Format selection

@pytest.mark.parametrize("url, expected", [
    ("http://localhost/Widgets/show.json", Format.JSON),
    ("http://localhost/Widgets/show.xml", Format.XML),
    ("https://localhost/Widgets/show.csv", Format.CSV),
    ("http://localhost/Widgets/show.py", Format.NATIVE),
    ("http://localhost/Widgets/show.php", Format.NATIVE),
    ("http://localhost/Widgets/show", Format.JSON),
    ("http://localhost/Widgets/show.html", Format.RAW),
    ("exception:/404", Format.JSON),
    ("ftp://localhost/Widgets/show.json", Format.RAW),
])
def test_select_format(url, expected):
    assert ResponseFormatter().select_format(URL.parse(url)) is expected


def test_default_format_is_configurable():
    formatter = ResponseFormatter(default_format="xml")
    assert formatter.select_format(URL.parse("/Widgets/show")) is Format.XML


def test_format_sets_content_type():
    response = Response()
    body = ResponseFormatter().format({"id": 5}, URL.parse("/Widgets/show.json"), response)
    assert body == '{"id":5}'
    assert response.header("Content-Type") == "application/json"


def test_format_xml_root_from_filename():
    response = Response()
    body = ResponseFormatter().format({"id": 5, "name": "w"}, URL.parse("/Widgets/show.xml"), response)
    assert body == XML_DECLARATION + "<show><id>5</id><name>w</name></show>"
    assert response.header("Content-Type") == "application/xml"


def test_format_raw_leaves_response_untouched():
    response = Response()
    value = object()
    assert ResponseFormatter().format(value, URL.parse("/Widgets/show.html"), response) is value
    assert response.header("Content-Type") is None


def test_native_format_round_trips_through_pickle():
    response = Response()
    body = ResponseFormatter().format([1, 2], URL.parse("/Widgets/list.py"), response)
    assert response.header("Content-Type") == "text/x-python"
    payload = body.split("pickle.loads(", 1)[1].rsplit(")", 1)[0]
    assert pickle.loads(eval(payload)) == [1, 2]
