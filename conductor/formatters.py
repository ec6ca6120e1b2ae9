"""
Response Formatters

Serializes an action's return value for REST-style controllers. The format
is picked once per response from the URL extension (falling back to the
controller default) and decides both the ``Content-Type`` header and the
encoder.

Supported formats:
    json    application/json
    xml     application/xml
    csv     text/csv
    native  text/x-python (pickled payload, trusted internal transport only)
    raw     value returned unchanged (non-HTTP schemes, unknown extensions)
"""

import enum
import json
import logging
import pickle
import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Set, Tuple

from conductor.exceptions import FormatError

logger = logging.getLogger(__name__)


class Format(str, enum.Enum):
    JSON = "json"
    XML = "xml"
    CSV = "csv"
    NATIVE = "native"
    RAW = "raw"


EXTENSION_FORMATS = {
    "json": Format.JSON,
    "xml": Format.XML,
    "csv": Format.CSV,
    "py": Format.NATIVE,
    "php": Format.NATIVE,
    "native": Format.NATIVE,
}

CONTENT_TYPES = {
    Format.JSON: "application/json",
    Format.XML: "application/xml",
    Format.CSV: "text/csv",
    Format.NATIVE: "text/x-python",
}

RENDERED_SCHEMES = ("http", "https", "exception")

_SCALARS = (str, int, float, bool)
_CSV_QUOTE = re.compile(r'[,"\s]')
_XML_NAME = re.compile(r"[^a-zA-Z]")
# Characters outside the XML 1.0 Char production
_XML_INVALID_CHAR = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


# =============================================================================
# Normalization
# =============================================================================

def primitive_of(data: Any, _active: Optional[Set[int]] = None) -> Any:
    """
    Recursively convert ``data`` into dicts, lists and scalars.

    Objects providing ``as_dict()`` are converted with it; other objects are
    dumped shallowly from their public attributes.

    Raises:
        FormatError: If ``data`` contains a reference cycle
    """
    if data is None or isinstance(data, _SCALARS):
        return data
    if isinstance(data, enum.Enum):
        return primitive_of(data.value, _active)
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8", errors="replace")

    if _active is None:
        _active = set()
    marker = id(data)
    if marker in _active:
        raise FormatError("Cannot encode a cyclic structure")
    _active.add(marker)

    try:
        if isinstance(data, Mapping):
            return {key: primitive_of(value, _active) for key, value in data.items()}
        if isinstance(data, (list, tuple, set, frozenset)):
            return [primitive_of(value, _active) for value in data]

        as_dict = getattr(data, "as_dict", None)
        if callable(as_dict):
            return primitive_of(as_dict(), _active)
        if hasattr(data, "isoformat"):
            return data.isoformat()
        if hasattr(data, "__dict__"):
            fields = {key: value for key, value in vars(data).items() if not key.startswith("_")}
            return primitive_of(fields, _active)
        return str(data)
    finally:
        _active.discard(marker)


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# =============================================================================
# Encoders
# =============================================================================

def json_encode(data: Any) -> str:
    try:
        return json.dumps(data, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise FormatError(f"JSON encoding failed: {e}") from e


def singular_of(word: str) -> str:
    """Naive English singular of ``word`` (``users`` -> ``user``)."""
    result = str(word)
    if result.lower() in _UNCOUNTABLE:
        return result
    for pattern, replacement in _SINGULAR_RULES:
        if pattern.search(result):
            return pattern.sub(replacement, result)
    return result


_UNCOUNTABLE = {"money", "rice", "series", "fish", "species", "information", "meta", "equipment"}

_SINGULAR_RULES = [
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"(matr)ices$", r"\1ix"),
        (r"(vert|ind)ices$", r"\1ex"),
        (r"^(ox)en", r"\1"),
        (r"(alias)es$", r"\1"),
        (r"(octop|vir)i$", r"\1us"),
        (r"(cris|ax|test)es$", r"\1is"),
        (r"(shoe)s$", r"\1"),
        (r"(o)es$", r"\1"),
        (r"(bus|campus)es$", r"\1"),
        (r"([ml])ice$", r"\1ouse"),
        (r"(x|ch|ss|sh)es$", r"\1"),
        (r"(m)ovies$", r"\1ovie"),
        (r"(s)eries$", r"\1eries"),
        (r"([^aeiouy]|qu)ies$", r"\1y"),
        (r"([lr])ves$", r"\1f"),
        (r"(tive)s$", r"\1"),
        (r"(hive)s$", r"\1"),
        (r"([^f])ves$", r"\1fe"),
        (r"(^analy)ses$", r"\1sis"),
        (r"((a)naly|(b)a|(d)iagno|(p)arenthe|(p)rogno|(s)ynop|(t)he)ses$", r"\1sis"),
        (r"([ti])a$", r"\1um"),
        (r"(p)eople$", r"\1erson"),
        (r"(m)en$", r"\1an"),
        (r"(s)tatuses$", r"\1tatus"),
        (r"(c)hildren$", r"\1hild"),
        (r"(n)ews$", r"\1ews"),
        (r"([^us])s$", r"\1"),
    )
]


def _is_numeric_key(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return isinstance(key, str) and key.isdigit()


def _element_name(name: Any) -> str:
    return _XML_NAME.sub("", str(name))


def _xml_text(value: Any) -> str:
    text = _scalar_text(value)
    match = _XML_INVALID_CHAR.search(text)
    if match:
        raise ValueError(f"character {match.group()!r} is not allowed in XML")
    return text


def _xml_children(element: ET.Element, data: Any) -> None:
    if isinstance(data, Mapping):
        items: Iterable[Tuple[Any, Any]] = data.items()
    elif isinstance(data, list):
        items = enumerate(data)
    else:
        element.text = None if data is None else _xml_text(data)
        return

    for key, value in items:
        if _is_numeric_key(key):
            tag = singular_of(element.tag)
        else:
            tag = _element_name(key) or singular_of(element.tag)
        child = ET.SubElement(element, tag)
        if isinstance(value, (Mapping, list)):
            _xml_children(child, value)
        elif value is not None:
            child.text = _xml_text(value)


def xml_encode(data: Any, root_name: str = "data") -> str:
    """
    Encode ``data`` as an XML document.

    A mapping with a single string key is unwrapped one level and the key
    names the root element.
    """
    if isinstance(data, Mapping) and len(data) == 1:
        (key, value), = data.items()
        if isinstance(key, str) and not key.isdigit():
            root_name, data = key, value

    root = ET.Element(_element_name(root_name) or "data")
    try:
        _xml_children(root, data)
        document = ET.tostring(root, encoding="unicode")
    except (TypeError, ValueError) as e:
        raise FormatError(f"XML encoding failed: {e}") from e
    return '<?xml version="1.0" encoding="utf-8"?>\n' + document


def _is_assoc(data: Any) -> bool:
    return isinstance(data, Mapping) and any(isinstance(key, str) for key in data)


def _csv_fields(row: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(row, Mapping):
        return row.items()
    if isinstance(row, list):
        return enumerate(row)
    return [(None, row)]


def csv_encode(data: Any) -> str:
    """
    Encode ``data`` as CSV.

    The header row comes from the first row's keys only; later rows with a
    different shape are written as they are. Non-scalar fields are skipped.
    """
    if _is_assoc(data):
        data = [data]
    elif isinstance(data, Mapping):
        data = list(data.values())
    elif not isinstance(data, list):
        return "" if data is None else _scalar_text(data)

    keys = []
    lines = []
    for index, row in enumerate(data):
        output = []
        for key, field in _csv_fields(row):
            if field is None:
                output.append("null")
            elif not isinstance(field, _SCALARS):
                continue
            else:
                text = _scalar_text(field)
                if _CSV_QUOTE.search(text):
                    text = '"' + text.replace('"', '""') + '"'
                output.append(text)
            if index == 0:
                keys.append(key if isinstance(key, str) else "")
        lines.append(",".join(output))

    lines.insert(0, ",".join(keys))
    return "\r\n".join(lines)


def native_encode(data: Any) -> str:
    """Python source that rebuilds ``data`` when executed."""
    try:
        payload = pickle.dumps(data)
    except (pickle.PicklingError, TypeError, AttributeError) as e:
        raise FormatError(f"Native encoding failed: {e}") from e
    return f"import pickle\ndata = pickle.loads({payload!r})\n"


# =============================================================================
# Formatter
# =============================================================================

class ResponseFormatter:
    """
    Picks a format for a URL and encodes a body with it.

    Args:
        default_format: Format used when the URL has no extension
        xml_root_name: Root element name when neither the data nor the URL
            provide one
        rendered_schemes: URL schemes that get formatted output; any other
            scheme receives the raw value
    """

    def __init__(
        self,
        default_format: str = "json",
        xml_root_name: str = "data",
        rendered_schemes: Iterable[str] = RENDERED_SCHEMES,
    ):
        self.default_format = default_format
        self.xml_root_name = xml_root_name
        self.rendered_schemes = tuple(scheme.lower() for scheme in rendered_schemes)

    def select_format(self, url) -> Format:
        if url.scheme.lower() not in self.rendered_schemes:
            return Format.RAW
        extension = (url.extension or self.default_format or "").lower()
        return EXTENSION_FORMATS.get(extension, Format.RAW)

    def encode(self, body: Any, fmt: Format, root_name: Optional[str] = None) -> Any:
        if fmt is Format.JSON:
            return json_encode(primitive_of(body))
        if fmt is Format.XML:
            return xml_encode(primitive_of(body), root_name or self.xml_root_name)
        if fmt is Format.CSV:
            return csv_encode(primitive_of(body))
        if fmt is Format.NATIVE:
            return native_encode(body)
        return body

    def format(self, body: Any, url, response) -> Any:
        """
        Encode ``body`` for ``url`` and set ``Content-Type`` on ``response``.

        Returns the raw body when the format resolves to ``raw``.
        """
        fmt = self.select_format(url)
        if fmt is Format.RAW:
            return body

        logger.debug(f"Formatting response for {url} as {fmt.value}")
        response.set_header("Content-Type", CONTENT_TYPES[fmt])
        root_name = _element_name(url.path.filename) or self.xml_root_name
        return self.encode(body, fmt, root_name)
