"""Routing errors."""

from typing import Any


class RoutingError(ValueError):
    """Base class for every error raised by url_router."""


class InvalidMethodError(RoutingError):
    """HTTP method is not in the supported list."""

    def __init__(self, method: str) -> None:
        """Initialize error."""
        self.method = method
        super().__init__(f"'{method}' is not a supported HTTP method")


class InvalidURLError(RoutingError):
    """URL is not absolute (missing scheme or scheme separator)."""

    def __init__(self, url: str) -> None:
        """Initialize error."""
        self.url = url
        super().__init__(f"Invalid URL: '{url}'")


class InvalidPlaceholderError(RoutingError):
    """Placeholder name or fragment can not be registered."""


class InvalidHandlerError(RoutingError):
    """Handler reference is malformed or can not be resolved."""


class InvalidRouteError(RoutingError):
    """Route path or base template is not a valid pattern."""


class DuplicateRouteNameError(RoutingError):
    """Route name is already held by another route."""

    def __init__(self, name: str) -> None:
        """Initialize error."""
        self.name = name
        super().__init__(
            f'Duplicate route name detected: "{name}"\n' "Route names must be unique."
        )


class PlaceholderError(RoutingError):
    """Placeholders can not be filled."""


class PlaceholderCountMismatchError(PlaceholderError):
    """Number of values does not match the number of placeholders."""

    def __init__(self, template: str, expected: int, given: int) -> None:
        """Initialize error."""
        self.template = template
        self.expected = expected
        self.given = given
        super().__init__(
            f"'{template}' expects {expected} value(s), {given} given"
        )


class PlaceholderValidationError(PlaceholderError):
    """Value does not match its placeholder pattern."""

    def __init__(self, token: str, value: Any, reason: str = "") -> None:
        """Initialize error."""
        self.token = token
        self.value = value
        message = reason or f"Value '{value}' does not match placeholder {token}"
        super().__init__(message)
