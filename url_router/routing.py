"""Routes, route collections and handler references."""

import importlib
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from url_router.errors import InvalidHandlerError, InvalidMethodError
from url_router.patterns import handler_pattern
from url_router.types import HTTP_METHODS, HandlerRef
from url_router.url import normalize_path

if TYPE_CHECKING:
    from url_router.router import Router

Handler = Union[Callable, HandlerRef]
RouteList = Sequence[Union["Route", Sequence[Any]]]


def _import_type(path: str) -> type:
    module_name, _, type_name = path.rpartition(".")
    if not module_name:
        raise InvalidHandlerError(
            f"Handler type '{path}' must be given as 'module.TypeName'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as err:
        raise InvalidHandlerError(
            f"Can not import handler module '{module_name}'"
        ) from err

    handler_type = getattr(module, type_name, None)
    if not isinstance(handler_type, type):
        raise InvalidHandlerError(f"'{path}' is not a class")
    return handler_type


def _parse_handler(handler: Any) -> Handler:
    """Resolve a handler into a callable or a HandlerRef.

    Strings look like ``"package.module.TypeName::method/1/0/2"`` where the
    optional ``/i/j/k`` suffix re-orders the captured parameters.
    """
    if isinstance(handler, HandlerRef):
        ref = handler
    elif isinstance(handler, str):
        if "::" not in handler:
            raise InvalidHandlerError(
                f"Handler '{handler}' is missing the '::' separator"
            )
        match = handler_pattern.match(handler)
        if not match:
            raise InvalidHandlerError(f"Malformed handler reference: '{handler}'")
        order = match["order"]
        ref = HandlerRef(
            type=_import_type(match["type"]),
            method_name=match["method"],
            param_order=tuple(int(i) for i in order.strip("/").split("/"))
            if order
            else None,
        )
    elif callable(handler):
        return handler
    else:
        raise InvalidHandlerError(
            f"Handler must be callable or a reference: {handler!r}"
        )

    if not callable(getattr(ref.type, ref.method_name, None)):
        raise InvalidHandlerError(
            f"'{ref.type.__name__}' has no method '{ref.method_name}'"
        )
    return ref


@dataclass(frozen=True)
class RouteMatch:
    """Result of a successful match: the route and what it captured."""

    route: "Route"
    captures: Tuple[str, ...]
    authority_captures: Tuple[str, ...] = ()

    @property
    def params(self) -> Tuple[str, ...]:
        """Return captures in the order the handler expects them."""
        return self.route.order_params(self.captures)

    @property
    def handler(self) -> Handler:
        """Return the route handler."""
        return self.route.handler

    @property
    def path(self) -> str:
        """Return the route path template."""
        return self.route.path

    @property
    def name(self) -> Optional[str]:
        """Return the route name."""
        return self.route.name

    def get_path(self, *values: Any) -> str:
        """Fill the route path template with values."""
        return self.route.get_path(*values)

    def run(self, *construct: Any) -> Any:
        """Call the route handler with the matched parameters."""
        return self.route.run(self.params, *construct)

    invoke = run


class Route:
    """Path template bound to a handler."""

    def __init__(
        self,
        collection: "RouteCollection",
        method: str,
        path: str,
        handler: Any,
        name: Optional[str] = None,
    ) -> None:
        """Initialize route object."""
        self.collection = collection
        self.method = method
        self.path = normalize_path(path)
        collection.router.compile_template(self.path)
        self.handler = _parse_handler(handler)
        self.name: Optional[str] = None
        if name is not None:
            self.set_name(name)

    def __repr__(self) -> str:
        """Return route representation."""
        return f"<Route {self.method} {self.path} name={self.name!r}>"

    def set_name(self, name: str) -> "Route":
        """Name the route, making it reachable through the router."""
        self.collection.router._add_named_route(name, self)
        self.name = name
        return self

    def get_path(self, *values: Any) -> str:
        """Fill the route path template with values."""
        return self.collection.router.fill_placeholders(self.path, *values)

    def order_params(self, captures: Sequence[str]) -> Tuple[str, ...]:
        """Re-order captures according to the handler reference."""
        if not isinstance(self.handler, HandlerRef) or self.handler.param_order is None:
            return tuple(captures)
        try:
            return tuple(captures[i] for i in self.handler.param_order)
        except IndexError as err:
            raise InvalidHandlerError(
                f"Parameter order {list(self.handler.param_order)} of route "
                f"'{self.path}' is out of range for {len(captures)} capture(s)"
            ) from err

    def bind(
        self, captures: Sequence[str], authority_captures: Sequence[str] = ()
    ) -> RouteMatch:
        """Return a match result carrying the captured values."""
        match = RouteMatch(self, tuple(captures), tuple(authority_captures))
        # An out of range parameter order fails here, not when the handler runs.
        self.order_params(match.captures)
        return match

    def run(self, params: Sequence[Any], *construct: Any) -> Any:
        """Call the handler.

        Opaque callables get ``(params, *construct)``. Handler references
        build ``type(*construct)`` and call the method with ``*params``.
        """
        if not isinstance(self.handler, HandlerRef):
            return self.handler(list(params), *construct)
        instance = self.handler.type(*construct)
        return getattr(instance, self.handler.method_name)(*params)


class RouteCollection:
    """Routes served under one base URL template."""

    def __init__(self, router: "Router", base_template: str) -> None:
        """Initialize collection object."""
        self.router = router
        self.base_template = base_template
        self.routes_by_method: Dict[str, List[Route]] = {}

    @property
    def routes(self) -> List[Route]:
        """Return every route of the collection."""
        return [route for routes in self.routes_by_method.values() for route in routes]

    def register(
        self, method: str, path: str, handler: Any, name: Optional[str] = None
    ) -> Route:
        """Register route."""
        if method not in HTTP_METHODS:
            raise InvalidMethodError(method)

        route = Route(self, method, path, handler, name)
        self.routes_by_method.setdefault(method, []).append(route)
        return route

    def get(self, path: str, handler: Any, name: Optional[str] = None) -> Route:
        """Register GET route."""
        return self.register("GET", path, handler, name)

    def post(self, path: str, handler: Any, name: Optional[str] = None) -> Route:
        """Register POST route."""
        return self.register("POST", path, handler, name)

    def put(self, path: str, handler: Any, name: Optional[str] = None) -> Route:
        """Register PUT route."""
        return self.register("PUT", path, handler, name)

    def patch(self, path: str, handler: Any, name: Optional[str] = None) -> Route:
        """Register PATCH route."""
        return self.register("PATCH", path, handler, name)

    def delete(self, path: str, handler: Any, name: Optional[str] = None) -> Route:
        """Register DELETE route."""
        return self.register("DELETE", path, handler, name)

    def options(self, path: str, handler: Any, name: Optional[str] = None) -> Route:
        """Register OPTIONS route."""
        return self.register("OPTIONS", path, handler, name)

    def head(self, path: str, handler: Any, name: Optional[str] = None) -> Route:
        """Register HEAD route."""
        return self.register("HEAD", path, handler, name)

    def group(self, prefix: str, routes: RouteList) -> List[Route]:
        """Prefix the path of every route in routes.

        Nested lists, like the return value of an inner ``group``, are
        flattened so groups can be composed.
        """
        grouped: List[Route] = []
        for item in routes:
            if isinstance(item, Route):
                grouped.append(item)
            elif isinstance(item, (list, tuple)):
                grouped.extend(self.group("", item))
            else:
                raise TypeError(
                    f"TypeError: group() expects routes or lists of routes, "
                    f"got {type(item).__name__}"
                )

        prefix = prefix.strip("/")
        paths = [
            normalize_path(f"{prefix}/{route.path.strip('/')}") for route in grouped
        ]
        for path in paths:
            self.router.compile_template(path)
        for route, path in zip(grouped, paths):
            route.path = path
        return grouped
