"""
URL and Path Value Objects

Immutable URL/Path types used by the routing core. The path resolver lives
here: ``Path.components`` turns a slashed URL path into the ordered list of
candidate namespace segments the Router walks.
"""

import posixpath
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from conductor.exceptions import HTTPStatusError


# Matches both "exception:/404" and "exception://404"
_EXCEPTION_URL = re.compile(r"^exception:(?://)?/?(\d+)$", re.IGNORECASE)


class Path:
    """
    A cleaned, slash-separated path.

    Repeated slashes are collapsed, surrounding whitespace and slashes are
    trimmed, and an empty path becomes ``/``.

    Example:
        path = Path("/Widgets/show.json")
        path.components          # ["Widgets", "show.json"]
        path.extension           # "json"
        path.filename            # "show"
        path.without_extension() # Path("/Widgets/show")
    """

    def __init__(self, path: str = "/"):
        raw = str(path or "")
        starts_with_slash = raw.lstrip().startswith("/")
        clean = re.sub(r"/+", "/", raw.strip("/ \t\n\r\0\x0b"))
        if starts_with_slash or not clean:
            clean = "/" + clean
        self._path = clean

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"Path({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Path):
            return self._path == other._path
        if isinstance(other, str):
            return self._path == Path(other)._path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._path)

    @property
    def components(self) -> List[str]:
        """Ordered, non-empty path segments."""
        return [part for part in self._path.split("/") if part]

    def component_at(self, index: int) -> Optional[str]:
        """Return the component at ``index``, or None if there is none."""
        components = self.components
        if 0 <= index < len(components):
            return components[index]
        return None

    @property
    def last_component(self) -> str:
        components = self.components
        return components[-1] if components else ""

    @property
    def extension(self) -> str:
        """Characters after the last period of the final component."""
        return posixpath.splitext(self.last_component)[1].lstrip(".")

    @property
    def filename(self) -> str:
        """Final component with the extension removed."""
        return posixpath.splitext(self.last_component)[0]

    def without_extension(self) -> "Path":
        extension = self.extension
        if not extension:
            return self
        return Path(self._path[: -(len(extension) + 1)])

    def as_dict(self) -> Dict[str, str]:
        return {
            "path": self._path,
            "basename": self.last_component,
            "filename": self.filename,
            "extension": self.extension,
        }


@dataclass(frozen=True)
class URL:
    """
    Parsed URL.

    Missing schemes default to ``http``. Internal exception URLs
    (``exception:/404``) keep their scheme and carry the status code as the
    single path component.
    """

    scheme: str = "http"
    host: str = ""
    port: Optional[int] = None
    path: Path = field(default_factory=Path)
    query: Dict[str, Any] = field(default_factory=dict)
    fragment: str = ""

    @classmethod
    def parse(cls, value: "str | URL") -> "URL":
        if isinstance(value, URL):
            return value

        value = str(value).strip()

        match = _EXCEPTION_URL.match(value)
        if match:
            return cls(scheme="exception", path=Path("/" + match.group(1)))

        try:
            parts = urlsplit(value)
            port = parts.port
        except ValueError as e:
            raise HTTPStatusError(400, f"Malformed URL {value!r}: {e}") from e
        return cls(
            scheme=(parts.scheme or "http").lower(),
            host=parts.hostname or "",
            port=port,
            path=Path(parts.path or "/"),
            query=dict(parse_qsl(parts.query, keep_blank_values=True)),
            fragment=parts.fragment,
        )

    @classmethod
    def exception(cls, code: int) -> "URL":
        """Synthetic URL used to re-route an error through the pipeline."""
        return cls(scheme="exception", path=Path(f"/{int(code)}"))

    def with_path(self, path: "str | Path") -> "URL":
        return replace(self, path=path if isinstance(path, Path) else Path(path))

    @property
    def extension(self) -> str:
        return self.path.extension

    def query_value(self, key: str, default: Any = None) -> Any:
        return self.query.get(key, default)

    def __str__(self) -> str:
        if self.scheme == "exception":
            return f"exception:{self.path}"
        netloc = self.host
        if self.port is not None:
            netloc = f"{netloc}:{self.port}"
        return urlunsplit((self.scheme, netloc, str(self.path), urlencode(self.query), self.fragment))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "host": self.host,
            "port": self.port,
            "path": str(self.path),
            "query": dict(self.query),
            "fragment": self.fragment,
        }
