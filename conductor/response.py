"""
Response Module

Accumulating HTTP response: status, ordered headers and body. Controllers
mutate one instance per routed call; adapters and the CLI emit it.
"""

import logging
import re
import sys
from typing import Any, Dict, List, Optional, TextIO

from conductor.status import coerce_status, translate_code

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"[\r\n]")


class Response:
    """
    Representation of an HTTP response.

    The status defaults to 200. Setting a status that is missing from the
    status table stores 500 instead of rejecting the caller.

    Example:
        response = Response()
        response.status = 201
        response.set_header("X-Powered-By", "conductor")
        response.body = "Created"
        response.emit()
    """

    def __init__(self, body: Any = None, status: int = 200):
        self._headers: Dict[str, str] = {}
        self._status = 200
        self.body = body
        self.status = status

    # Status

    @property
    def status(self) -> int:
        return self._status

    @status.setter
    def status(self, code: int) -> None:
        coerced = coerce_status(code)
        if coerced != code:
            logger.warning(f"Unknown HTTP status {code}, using {coerced}")
        self._status = coerced

    def set_status(self, code: int) -> None:
        self.status = code

    @property
    def reason_phrase(self) -> str:
        return translate_code(self._status) or ""

    @property
    def status_line(self) -> str:
        return f"HTTP/1.0 {self._status} {self.reason_phrase}"

    # Headers

    @property
    def headers(self) -> Dict[str, str]:
        """Copy of the header mapping, in insertion order."""
        return dict(self._headers)

    def set_header(self, key: str, value: Any) -> None:
        if not isinstance(key, str) or not key:
            raise ValueError(f"Header key is expected to be a string, received {type(key).__name__} instead.")
        if value is None:
            raise ValueError("Header value cannot be None.")
        if isinstance(value, (dict, list, tuple, set)):
            raise ValueError(f"Header value is expected to be a scalar value, received {type(value).__name__} instead.")
        value = str(value)
        if _LINE_BREAK.search(key) or _LINE_BREAK.search(value):
            raise ValueError(f"Header {key!r} cannot contain line breaks.")
        self._headers[key] = value

    def header(self, key: str) -> Optional[str]:
        if not isinstance(key, str):
            raise ValueError("Header key is expected to be a string.")
        return self._headers.get(key)

    def clear_header(self, key: str) -> None:
        if not isinstance(key, str):
            raise ValueError("Header key is expected to be a string.")
        self._headers.pop(key, None)

    def header_lines(self) -> List[str]:
        """Status line followed by ``Key: value`` lines."""
        lines = [self.status_line]
        lines.extend(f"{key}: {value}" for key, value in self._headers.items())
        return lines

    # Body

    @property
    def text(self) -> str:
        """Body coerced to a string (None becomes empty)."""
        if self.body is None:
            return ""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return str(self.body)

    def emit(self, stream: Optional[TextIO] = None) -> None:
        """Write the full response (headers, blank line, body) to ``stream``."""
        stream = stream or sys.stdout
        for line in self.header_lines():
            stream.write(line + "\r\n")
        stream.write("\r\n")
        stream.write(self.text)
        stream.flush()

    def __repr__(self) -> str:
        return f"Response(status={self._status}, headers={self._headers!r})"
