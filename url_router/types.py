from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class HTTPMethod(str, Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"
    TRACE = "TRACE"


HTTP_METHODS = tuple(method.value for method in HTTPMethod)


@dataclass(frozen=True)
class HandlerRef:
    type: type
    method_name: str
    param_order: Optional[Tuple[int, ...]] = None
