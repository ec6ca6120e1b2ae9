"""
HTTP Status Codes

Fixed status-code table used when emitting the ``HTTP/1.0`` status line.
Codes outside this table are not valid response statuses.
"""

from typing import Dict, Optional


STATUS_PHRASES: Dict[int, str] = {
    100: "Continue",
    101: "Switching Protocols",
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non-Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Moved Temporarily",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Time-out",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Request Entity Too Large",
    414: "Request-URI Too Large",
    415: "Unsupported Media Type",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Time-out",
    505: "HTTP Version not supported",
}

DEFAULT_ERROR_STATUS = 500


def translate_code(code: int) -> Optional[str]:
    """
    Return the reason phrase for ``code``, or None if it is unknown.

    Raises:
        TypeError: If ``code`` is not an integer
    """
    if isinstance(code, bool) or not isinstance(code, int):
        raise TypeError(f"Status is expected to be an integer, got {type(code).__name__}")
    return STATUS_PHRASES.get(code)


def coerce_status(code: int) -> int:
    """Return ``code`` if it is a known status, else 500."""
    if isinstance(code, bool) or not isinstance(code, int) or translate_code(code) is None:
        return DEFAULT_ERROR_STATUS
    return code
