"""Match requests against routes served under base URL templates."""

import logging
import os
import re
import sys
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from url_router.errors import (
    DuplicateRouteNameError,
    InvalidMethodError,
    InvalidRouteError,
)
from url_router.placeholders import PlaceholderRegistry
from url_router.routing import Route, RouteCollection, RouteMatch
from url_router.types import HTTP_METHODS
from url_router.url import RequestURL


def _debug_from_env() -> bool:
    return os.environ.get("URL_ROUTER_DEBUG", "").lower() in ("1", "true", "yes")


class Router:
    """Router."""

    FORMAT_STRING = "[%(name)s] - [%(levelname)s] - %(message)s"

    def __init__(
        self,
        name: str = "url_router",
        debug: bool = False,
        configure_logs: bool = True,
        placeholders: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize Router object."""
        self.name: str = name
        self.debug: bool = debug or _debug_from_env()
        self.services: List[Tuple[str, RouteCollection]] = []
        self.placeholders = PlaceholderRegistry()
        self.named_routes: Dict[str, Route] = {}
        self.log = logging.getLogger(self.name)
        if configure_logs:
            self._configure_logging()
        if placeholders:
            self.add_placeholder(placeholders)

    @property
    def routes(self) -> List[Route]:
        """Return every route, in service order."""
        return [route for _, collection in self.services for route in collection.routes]

    def _configure_logging(self) -> None:
        if self._already_configured(self.log):
            return

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(self.FORMAT_STRING)
        handler.setFormatter(formatter)
        self.log.propagate = False
        if self.debug:
            level = logging.DEBUG
        else:
            level = logging.ERROR
        self.log.setLevel(level)
        self.log.addHandler(handler)

    def _already_configured(self, log) -> bool:
        if not log.handlers:
            return False

        for handler in log.handlers:
            if isinstance(handler, logging.StreamHandler):
                if handler.stream == sys.stdout:
                    return True

        return False

    def _add_named_route(self, name: str, route: Route) -> None:
        current = self.named_routes.get(name)
        if current is not None and current is not route:
            raise DuplicateRouteNameError(name)

        if route.name is not None and route.name != name:
            self.named_routes.pop(route.name, None)
        self.named_routes[name] = route

    def serve(
        self,
        base_template: str,
        configure: Callable[[RouteCollection], Any],
        placeholders: Optional[Mapping[str, str]] = None,
    ) -> RouteCollection:
        """Register the routes served under a base URL template.

        ``configure`` receives the new collection and registers routes on it.
        Placeholders are added first, so the routes may use them.
        """
        if not callable(configure):
            raise TypeError(
                f"TypeError: serve() expects a callable, got {type(configure).__name__}"
            )

        if placeholders:
            self.add_placeholder(placeholders)

        self.compile_template(base_template)
        collection = RouteCollection(self, base_template)
        named_routes = dict(self.named_routes)
        try:
            configure(collection)
        except Exception:
            # Names of a collection that is not served must not stay reachable.
            self.named_routes = named_routes
            raise
        self.services.append((base_template, collection))
        self.log.debug(
            f"Serving {base_template} with {len(collection.routes)} route(s)"
        )
        return collection

    def add_placeholder(
        self, name: Union[str, Mapping[str, str]], fragment: Optional[str] = None
    ) -> None:
        """Add one placeholder, or a mapping of placeholders."""
        if isinstance(name, Mapping):
            self.placeholders.add_all(name)
        else:
            self.placeholders.add(name, fragment)  # type: ignore
        self.log.debug(f"Placeholders: {self.placeholders.all()}")

    def get_placeholders(self) -> Dict[str, str]:
        """Return placeholders, custom ones first."""
        return self.placeholders.all()

    def replace_placeholders(self, template: str, reverse: bool = False) -> str:
        """Replace tokens by patterns, or patterns by tokens if reverse."""
        return self.placeholders.substitute(template, reverse)

    def fill_placeholders(self, template: str, *values: Any) -> str:
        """Replace tokens with values."""
        return self.placeholders.fill(template, *values)

    def compile_template(self, template: str) -> "re.Pattern[str]":
        """Compile a template with its placeholders replaced."""
        try:
            return re.compile(self.replace_placeholders(template))
        except re.error as err:
            raise InvalidRouteError(
                f"'{template}' is not a valid route pattern: {err}"
            ) from err

    def get_named_route(self, name: str) -> Optional[Route]:
        """Return the route with that name, if any."""
        return self.named_routes.get(name)

    def _route_matching(
        self, collection: RouteCollection, method: str, path: str
    ) -> Optional[Tuple[Route, Tuple[str, ...]]]:
        for route in collection.routes_by_method.get(method, []):
            expr = self.compile_template(route.path)
            match = expr.fullmatch(path)
            if match:
                return route, match.groups(default="")

        return None

    def match(self, method: str, url: str) -> Optional[RouteMatch]:
        """Return the first route matching method and url.

        Services are tried in registration order, then routes in
        registration order. Returns None when nothing matches.
        """
        if method not in HTTP_METHODS:
            raise InvalidMethodError(method)

        request_url = RequestURL(url)
        for base_template, collection in self.services:
            expr = self.compile_template(base_template)
            authority = expr.fullmatch(request_url.authority)
            if not authority:
                continue

            found = self._route_matching(collection, method, request_url.path)
            if found:
                route, captures = found
                self.log.debug(f"{method} {url} matched {route!r} in {base_template}")
                return route.bind(captures, authority.groups(default=""))

        self.log.debug(f"No route for: {method} - {url}")
        return None
