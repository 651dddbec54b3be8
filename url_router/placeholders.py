"""Placeholder tokens and their regex fragments.

A template like ``/users/{num}`` is turned into a matcher by replacing each
known token with its fragment (``/users/([0-9]+)``). The reverse direction
turns fragments back into tokens, and :meth:`PlaceholderRegistry.fill` puts
concrete values in place of the tokens.

"""

import re
from typing import Any, Dict, Mapping

from url_router.errors import (
    InvalidPlaceholderError,
    PlaceholderCountMismatchError,
    PlaceholderValidationError,
)
from url_router.patterns import name_pattern, token_expr

DEFAULT_PLACEHOLDERS: Dict[str, str] = {
    "alpha": "([a-zA-Z]+)",
    "alphanum": "([a-zA-Z0-9]+)",
    "any": "(.*)",
    "num": "([0-9]+)",
    "segment": "([^/]+)",
    "port": "([0-9]{1,5})",
    "scheme": "(https?)",
    "subdomain": "([^./]+)",
    "title": "([a-zA-Z0-9_-]+)",
}


def _token(name: str) -> str:
    return "{" + name + "}"


def _validate_name(name: Any) -> str:
    if not isinstance(name, str):
        raise InvalidPlaceholderError(f"Placeholder name must be a string: {name!r}")
    if name.startswith("{") and name.endswith("}"):
        name = name[1:-1]
    if not name_pattern.match(name):
        raise InvalidPlaceholderError(f"Invalid placeholder name: '{name}'")
    return name


def _validate_fragment(name: str, fragment: Any) -> str:
    """Check that fragment is one capturing group wrapping the whole pattern."""
    if not isinstance(fragment, str):
        raise InvalidPlaceholderError(
            f"Placeholder {_token(name)} fragment must be a string: {fragment!r}"
        )
    try:
        compiled = re.compile(fragment)
    except re.error as err:
        raise InvalidPlaceholderError(
            f"Placeholder {_token(name)} has an invalid pattern '{fragment}': {err}"
        ) from err

    wrapped = (
        compiled.groups == 1
        and fragment.startswith("(")
        and not fragment.startswith("(?")
        and fragment.endswith(")")
    )
    if wrapped:
        # The inner pattern only compiles without groups when the first
        # parenthesis closes on the last character.
        try:
            wrapped = re.compile(fragment[1:-1]).groups == 0
        except re.error:
            wrapped = False
    if not wrapped:
        raise InvalidPlaceholderError(
            f"Placeholder {_token(name)} pattern '{fragment}' must be wrapped "
            "in exactly one capturing group"
        )
    return fragment


class PlaceholderRegistry:
    """Ordered mapping of placeholder names to regex fragments.

    Custom placeholders are looked up before the defaults, and a custom
    placeholder hides a default of the same name.
    """

    def __init__(self) -> None:
        """Initialize registry with the default placeholders."""
        self._defaults: Dict[str, str] = dict(DEFAULT_PLACEHOLDERS)
        self._custom: Dict[str, str] = {}

    def __contains__(self, name: str) -> bool:
        """Check if a placeholder is known, by name or token."""
        return _token(name.strip("{}")) in self.all()

    def __len__(self) -> int:
        """Return the number of visible placeholders."""
        return len(self.all())

    def add(self, name: str, fragment: str) -> None:
        """Add or overwrite one placeholder."""
        self.add_all({name: fragment})

    def add_all(self, placeholders: Mapping[str, str]) -> None:
        """Add placeholders ahead of the previously added ones."""
        entries: Dict[str, str] = {}
        for name, fragment in placeholders.items():
            name = _validate_name(name)
            entries[name] = _validate_fragment(name, fragment)

        previous = {k: v for k, v in self._custom.items() if k not in entries}
        self._custom = {**entries, **previous}

    def all(self) -> Dict[str, str]:
        """Return ``{"{name}": fragment}``, custom placeholders first."""
        placeholders = {_token(name): frag for name, frag in self._custom.items()}
        for name, fragment in self._defaults.items():
            placeholders.setdefault(_token(name), fragment)
        return placeholders

    def substitute(self, template: str, reverse: bool = False) -> str:
        """Replace tokens by fragments, or fragments by tokens if reverse.

        Unknown tokens and unknown fragments are left untouched. The template
        is scanned once, so replacements are never substituted again.
        """
        placeholders = self.all()
        if not reverse:
            return token_expr.sub(
                lambda m: placeholders.get(m.group(), m.group()), template
            )

        tokens: Dict[str, str] = {}
        for token, fragment in placeholders.items():
            tokens.setdefault(fragment, token)
        expr = re.compile("|".join(re.escape(fragment) for fragment in tokens))
        return expr.sub(lambda m: tokens[m.group()], template)

    def fill(self, template: str, *values: Any) -> str:
        """Replace tokens, in order, with values matching their fragments."""
        placeholders = self.all()
        found = [m.group() for m in token_expr.finditer(template)]
        if len(found) != len(values):
            raise PlaceholderCountMismatchError(template, len(found), len(values))

        filled = []
        for token, value in zip(found, values):
            fragment = placeholders.get(token)
            if fragment is None:
                raise PlaceholderValidationError(
                    token, value, f"Placeholder {token} is not registered"
                )
            value = str(value)
            if not re.fullmatch(fragment, value):
                raise PlaceholderValidationError(token, value)
            filled.append(value)

        parts = iter(filled)
        return token_expr.sub(lambda m: next(parts), template)
