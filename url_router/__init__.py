"""url_router: match HTTP requests against templated base URLs and paths."""

from url_router.errors import (
    DuplicateRouteNameError,
    InvalidHandlerError,
    InvalidMethodError,
    InvalidPlaceholderError,
    InvalidRouteError,
    InvalidURLError,
    PlaceholderCountMismatchError,
    PlaceholderError,
    PlaceholderValidationError,
    RoutingError,
)
from url_router.placeholders import PlaceholderRegistry
from url_router.router import Router
from url_router.routing import Route, RouteCollection, RouteMatch
from url_router.types import HTTP_METHODS, HandlerRef, HTTPMethod

__version__ = "1.0.0"

__all__ = [
    "HTTP_METHODS",
    "DuplicateRouteNameError",
    "HTTPMethod",
    "HandlerRef",
    "InvalidHandlerError",
    "InvalidMethodError",
    "InvalidPlaceholderError",
    "InvalidRouteError",
    "InvalidURLError",
    "PlaceholderCountMismatchError",
    "PlaceholderError",
    "PlaceholderRegistry",
    "PlaceholderValidationError",
    "Route",
    "RouteCollection",
    "RouteMatch",
    "Router",
    "RoutingError",
]
