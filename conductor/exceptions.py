"""
Conductor Exceptions

HTTP-status-carrying exceptions raised by the routing pipeline. The
Delegate converts any of these (or any other exception, as a 500) into an
``exception:/{code}`` URL and re-routes it, so error pages are ordinary
controller actions.
"""

from typing import TYPE_CHECKING, Optional

from conductor.status import DEFAULT_ERROR_STATUS, STATUS_PHRASES

if TYPE_CHECKING:
    from conductor.response import Response


class HTTPStatusError(Exception):
    """
    Base exception carrying an HTTP status code.

    Invalid codes (non-integers or codes missing from the status table)
    fall back to 500.
    """

    default_code = DEFAULT_ERROR_STATUS

    def __init__(self, code: Optional[int] = None, reason: Optional[str] = None):
        if code is None:
            code = self.default_code
        if isinstance(code, bool) or not isinstance(code, int) or code not in STATUS_PHRASES:
            code = DEFAULT_ERROR_STATUS
        self.code = code
        self.message = STATUS_PHRASES[code]
        self._reason = reason
        super().__init__(reason or self.message)

    @property
    def reason(self) -> str:
        return self._reason or self.message


class NotFound(HTTPStatusError):
    """No controller matches any prefix of the requested path."""

    default_code = 404

    def __init__(self, reason: Optional[str] = None):
        super().__init__(404, reason)


class RouteNotFound(NotFound):
    """A controller was found but has no matching action method."""


class FormatError(HTTPStatusError):
    """The selected encoder could not serialize the response body."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(500, reason)


class Redirect(HTTPStatusError):
    """Raised by ``Controller.redirect`` to short-circuit with a prepared response."""

    def __init__(self, response: "Response"):
        self.response = response
        super().__init__(response.status, response.header("Location"))


def status_code_of(error: BaseException) -> int:
    """HTTP status for an arbitrary exception (500 unless it carries one)."""
    if isinstance(error, HTTPStatusError):
        return error.code
    return DEFAULT_ERROR_STATUS
