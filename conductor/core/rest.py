"""
RESTful Controller

Controller whose action results are serialized (JSON, XML, CSV or native)
according to the requested URL's extension.
"""

from typing import Any, Optional, Sequence

from conductor.core.base import Controller
from conductor.formatters import ResponseFormatter
from conductor.url import URL


class RestController(Controller):
    """
    Controller for building RESTful API endpoints.

    ``/widgets/show.xml`` is rendered as XML, ``/widgets/show`` with the
    controller's ``format`` (or ``Config.DEFAULT_FORMAT`` when unset).
    Requests whose URL scheme is not http, https or exception get the raw
    return value back.

    Example:
        class Widgets(RestController):
            format = "json"

            def get_show(self, url):
                return {"id": 5}
    """

    format: Optional[str] = None

    @property
    def formatter(self) -> ResponseFormatter:
        return ResponseFormatter(
            default_format=self.format or self.config.DEFAULT_FORMAT,
            xml_root_name=self.config.XML_ROOT_NAME,
            rendered_schemes=self.config.Internal.RENDERED_SCHEMES,
        )

    def format_body(self, body: Any, attachments: Sequence[Any]) -> Any:
        # The URL is always the first attachment
        url = attachments[0] if attachments and isinstance(attachments[0], URL) else self.request.url
        return self.formatter.format(body, url, self.response)
