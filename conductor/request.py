"""
Request Context

Immutable per-dispatch request information handed to controllers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from conductor.url import URL

CLI_METHOD = "cli"


@dataclass(frozen=True)
class Request:
    """
    Request context for one dispatch.

    Attributes:
        method: HTTP method (``"cli"`` when dispatched outside HTTP)
        url: The requested URL
        headers: Request headers
        form: Parsed form/JSON body values
    """

    method: str = CLI_METHOD
    url: URL = field(default_factory=URL)
    headers: Mapping[str, str] = field(default_factory=dict)
    form: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, url: "str | URL", method: Optional[str] = None, **kwargs) -> "Request":
        return cls(method=method.upper() if method else CLI_METHOD, url=URL.parse(url), **kwargs)

    @property
    def extension(self) -> str:
        return self.url.extension

    @property
    def query(self) -> Dict[str, Any]:
        return self.url.query

    def get(self, key: str, default: Any = None) -> Any:
        """Query-string value for ``key``."""
        return self.url.query.get(key, default)

    def post(self, key: str, default: Any = None) -> Any:
        """Form value for ``key``."""
        return self.form.get(key, default)
