"""
Product catalogue

Demonstrates verb-prefixed actions, per-request state, lifecycle hooks and
extension-based formatting (.json, .xml, .csv, .py).
"""

from conductor import RestController
from conductor.exceptions import HTTPStatusError, NotFound
from conductor.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"id": 1, "name": "Gear", "price": 4.5, "in_stock": True},
    {"id": 2, "name": "Bolt, hex", "price": 0.25, "in_stock": False},
]


class Products(RestController):
    format = "json"

    def initialize(self):
        self.products = [dict(product) for product in PRODUCTS]

    def will_handle_url(self, url, method_name):
        logger.info(f"{self.request.method} {url} -> {method_name}")

    def get_list(self, url, *attachments):
        return self.products

    def get_show(self, url, *attachments):
        product_id = self.request.get("id")
        for product in self.products:
            if str(product["id"]) == str(product_id):
                return {"product": product}
        raise NotFound(f"No product with id {product_id}")

    def post_create(self, url, *attachments):
        name = self.request.post("name")
        if not name:
            raise HTTPStatusError(400, "name is required")
        self.set_status(201)
        return {"product": {"id": len(self.products) + 1, "name": name}}

    def action_catalogue(self, url, *attachments):
        self.redirect("/Products/list")
