"""Test routes and route collections."""

import pytest

from url_router import (
    HandlerRef,
    InvalidHandlerError,
    InvalidMethodError,
    InvalidRouteError,
    PlaceholderCountMismatchError,
    RouteMatch,
)
from url_router.routing import Route, _parse_handler

from support import Shop


def test_parse_handler_callable(funct):
    """Callables are used as they are."""
    assert _parse_handler(funct) is funct


def test_parse_handler_string():
    """Handler strings are resolved to a HandlerRef."""
    assert _parse_handler("support.Shop::index") == HandlerRef(Shop, "index")
    assert _parse_handler("support.Shop::show_product/1/0/2") == HandlerRef(
        Shop, "show_product", (1, 0, 2)
    )
    assert _parse_handler("support.Shop::price/0/0") == HandlerRef(
        Shop, "price", (0, 0)
    )


def test_parse_handler_ref():
    """HandlerRef are checked but kept."""
    ref = HandlerRef(Shop, "index")
    assert _parse_handler(ref) is ref
    with pytest.raises(InvalidHandlerError):
        _parse_handler(HandlerRef(Shop, "missing"))


@pytest.mark.parametrize(
    "handler",
    [
        "support.Shop",
        "Shop::index",
        "support.Shop::missing",
        "support.Missing::index",
        "nowhere_to_be_found.Shop::index",
        "support.Shop::index/a",
        "support.Shop::index/",
        42,
        None,
    ],
)
def test_parse_handler_invalid(handler):
    """Malformed handlers fail at registration time."""
    with pytest.raises(InvalidHandlerError):
        _parse_handler(handler)


def test_route_path_normalization(router, funct):
    """Paths start with one slash and have no trailing slash."""
    collection = router.serve("http://domain.tld", lambda c: None)
    assert collection.get("", funct).path == "/"
    assert collection.get("/", funct).path == "/"
    assert collection.get("contact/", funct).path == "/contact"
    assert collection.get("//users/{num}//", funct).path == "/users/{num}"


def test_route_name(router, funct):
    """Named routes are indexed by the router."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/users", funct, "users")
    assert route.name == "users"
    assert router.get_named_route("users") is route

    other = collection.get("/contact", funct)
    assert other.name is None
    assert other.set_name("contact") is other
    assert router.get_named_route("contact") is other


def test_route_get_path(router, funct):
    """Fill the path template with values."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/users/{num}/posts/{num}", funct)
    assert route.get_path(10, 20) == "/users/10/posts/20"
    with pytest.raises(PlaceholderCountMismatchError):
        route.get_path(10)


def test_route_bind(router, funct):
    """Binding returns a new match and leaves the route untouched."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/users/{num}", funct)

    first = route.bind(["25"])
    second = route.bind(["7"], ["http"])
    assert isinstance(first, RouteMatch)
    assert first.captures == ("25",)
    assert first.params == ("25",)
    assert second.captures == ("7",)
    assert second.authority_captures == ("http",)
    assert first.route is second.route is route

    with pytest.raises(AttributeError):
        first.captures = ("1",)


def test_route_bind_param_order(router):
    """Handler parameter order re-maps captures."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get(
        "/shop/{title}/{num}/([a-z]{2})", "support.Shop::show_product/1/0/2"
    )
    match = route.bind(["foo-bar", "22", "en"])
    assert match.captures == ("foo-bar", "22", "en")
    assert match.params == ("22", "foo-bar", "en")
    assert match.run() == [22, "foo-bar", "en"]

    duplicated = collection.get("/price/{num}", "support.Shop::show_product/0/0/0")
    assert duplicated.bind(["5"]).params == ("5", "5", "5")


def test_route_bind_param_order_out_of_range(router):
    """Out of range parameter order fails when binding."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/price/{num}", "support.Shop::price/3")
    with pytest.raises(InvalidHandlerError):
        route.bind(["5"])


def test_route_run_callable(router, funct):
    """Opaque handlers get params and construction arguments."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/users/{num}", funct)
    route.bind(["25"]).run("db", "cache")
    funct.assert_called_once_with(["25"], "db", "cache")


def test_route_run_reference(router):
    """Handler references are built with the construction arguments."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/price/{num}", "support.Shop::price")
    assert route.bind(["5"]).run() == "5 EUR"
    assert route.bind(["5"]).invoke("USD") == "5 USD"


def test_route_run_propagates(router):
    """Handler exceptions are not caught."""

    def handler(params):
        raise KeyError(params[0])

    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/users/{num}", handler)
    with pytest.raises(KeyError):
        route.bind(["25"]).run()


def test_collection_methods(router, funct):
    """Each method helper registers in its own bucket."""
    collection = router.serve("http://domain.tld", lambda c: None)
    for method in ["get", "post", "put", "patch", "delete", "options", "head"]:
        route = getattr(collection, method)("/", funct)
        assert isinstance(route, Route)
        assert route.method == method.upper()
        assert collection.routes_by_method[method.upper()] == [route]
    assert len(collection.routes) == 7


def test_collection_register(router, funct):
    """Routes keep registration order within a method."""
    collection = router.serve("http://domain.tld", lambda c: None)
    first = collection.register("TRACE", "/a", funct)
    second = collection.register("TRACE", "/b", funct)
    assert collection.routes_by_method["TRACE"] == [first, second]

    with pytest.raises(InvalidMethodError):
        collection.register("get", "/", funct)


def test_collection_group(router, funct):
    """Groups prefix paths and can be nested."""
    collection = router.serve("http://domain.tld", lambda c: None)
    routes = collection.group(
        "users",
        [
            collection.get("", funct, "users"),
            collection.post("", funct, "users.create"),
            collection.get("{num}", funct, "users.show"),
            collection.group(
                "{num}/panel",
                [
                    collection.get("", funct, "panel"),
                    collection.group(
                        "config", [collection.get("update", funct, "panel.update")]
                    ),
                ],
            ),
        ],
    )
    assert [route.path for route in routes] == [
        "/users",
        "/users",
        "/users/{num}",
        "/users/{num}/panel",
        "/users/{num}/panel/config/update",
    ]
    assert [route.name for route in routes] == [
        "users",
        "users.create",
        "users.show",
        "panel",
        "panel.update",
    ]


def test_collection_group_empty_prefix(router, funct):
    """Empty prefix and root path give the root path."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/", funct)
    collection.group("/", [route])
    assert route.path == "/"
    collection.group("/api/", [route])
    assert route.path == "/api"


@pytest.mark.parametrize("item", ["a", 42, None])
def test_collection_group_invalid_item(router, funct, item):
    """Group items must be routes or lists of routes."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/a", funct)
    with pytest.raises(TypeError):
        collection.group("users", [route, item])
    assert route.path == "/a"


def test_collection_group_invalid_prefix(router, funct):
    """A prefix that breaks the pattern leaves paths unchanged."""
    collection = router.serve("http://domain.tld", lambda c: None)
    route = collection.get("/a", funct)
    with pytest.raises(InvalidRouteError):
        collection.group("([0-9]", [route])
    assert route.path == "/a"


def test_route_invalid_pattern(router, funct):
    """Malformed raw patterns are rejected on registration."""
    collection = router.serve("http://domain.tld", lambda c: None)
    with pytest.raises(InvalidRouteError):
        collection.get("/shop/([a-z]{2}", funct)
    assert collection.routes == []
