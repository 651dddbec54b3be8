"""Regex patterns for templates, handler references and request URLs."""

import re

# Pattern matching expressions
token_expr = re.compile(r"\{(?P<name>[a-zA-Z_][a-zA-Z0-9_.-]*)\}")
name_pattern = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_.-]*$")
handler_pattern = re.compile(
    r"^(?P<type>[a-zA-Z_][a-zA-Z0-9_.]*)::(?P<method>[a-zA-Z_][a-zA-Z0-9_]*)"
    r"(?P<order>(/[0-9]+)*)$"
)
url_pattern = re.compile(
    r"^(?P<scheme>[^:/?#]+)://(?P<netloc>[^/?#]*)"
    r"(?P<path>[^?#]*)(\?(?P<query>[^#]*))?(#(?P<fragment>.*))?$",
    re.DOTALL,
)
