"""
Home page and error pages for the example shop
"""

from conductor import RestController


class MainController(RestController):
    """Serves "/" and every exception:/{code} URL."""

    def action_index(self, url, *attachments):
        return {
            "message": "Welcome to the Conductor example shop",
            "try": ["/Products/list.json", "/Products/list.csv", "/Products/show.xml?id=2", "/admin/Orders"],
        }

    def action_exception(self, url, error, *attachments):
        return {"error": {"code": getattr(error, "code", 500), "message": str(error)}}
