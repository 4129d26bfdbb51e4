from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_ARGUMENTS = "invalid_arguments"
    INTERNAL_ERROR = "internal_error"


# JSON-RPC error codes used on the wire.
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
PARSE_ERROR = -32700
INVALID_REQUEST = -32600

_CODES = {
    ErrorKind.NOT_FOUND: METHOD_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENTS: INVALID_PARAMS,
    ErrorKind.INTERNAL_ERROR: INTERNAL_ERROR,
}


class ToolError(RuntimeError):
    """Dispatch-level failure of a single tool call.

    Raised by the dispatcher for unknown tools, bad arguments and handler
    failures. The server turns it into a JSON-RPC error response.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def code(self) -> int:
        return _CODES[self.kind]

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}

    def __repr__(self) -> str:
        return f"ToolError({self.kind.name}, {self.message!r})"
