"""
Namespaced plain controller, routed at /admin/Orders
"""

from conductor import Controller


class Orders(Controller):
    def action_index(self, url, *attachments):
        self.set_header("Content-Type", "text/plain")
        return "No open orders"
