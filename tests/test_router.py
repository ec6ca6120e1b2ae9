"""
Unit tests for path resolution against the controller registry
"""

import pytest

from conductor import Controller
from conductor.core.registry import ControllerRegistry
from conductor.core.router import Router
from conductor.exceptions import NotFound
from conductor.request import Request


class Shop(Controller):
    def action_index(self, url):
        return "shop"


class ShopItems(Controller):
    def action_list(self, url):
        return "items"


class AdminUsers(Controller):
    def action_index(self, url):
        return "users"


@pytest.fixture
def router():
    registry = ControllerRegistry()
    registry.register(Shop)
    registry.register(ShopItems, name="Shop.Items")
    registry.register(AdminUsers, name="admin.Users")
    return Router(registry)


def test_empty_path_is_rejected(router):
    with pytest.raises(NotFound):
        router.resolve([])


def test_unknown_path_is_not_found(router):
    with pytest.raises(NotFound):
        router.resolve(["Nothing", "here"])


def test_single_component(router):
    route = router.resolve(["Shop"])
    assert isinstance(route.controller, Shop)
    assert route.remaining == []
    assert route.action is None
    assert route.consumed == 1


def test_namespaced_lookup_is_case_insensitive(router):
    route = router.resolve(["ADMIN", "users", "index", "7"])
    assert isinstance(route.controller, AdminUsers)
    assert route.consumed == 2
    assert route.remaining == ["index", "7"]
    assert route.action == "index"


def test_consumed_prefix_plus_remaining_is_the_path(router):
    components = ["admin", "Users", "show", "extra"]
    route = router.resolve(components)
    assert components[:route.consumed] + route.remaining == components


def test_first_matching_prefix_wins(router):
    # "Shop.Items" is never reached because "Shop" matches first
    route = router.resolve(["Shop", "Items", "list"])
    assert isinstance(route.controller, Shop)
    assert route.action == "Items"
    assert route.remaining == ["Items", "list"]


def test_each_resolution_gets_a_fresh_controller(router):
    request = Request.create("/Shop", "GET")
    first = router.resolve(["Shop"], request)
    second = router.resolve(["Shop"], request)
    assert first.controller is not second.controller
    assert first.controller.request is request
