from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from ..tools.errors import INVALID_REQUEST, PARSE_ERROR

PROTOCOL_VERSION = "2024-11-05"

@dataclass
class ServerInfo:
    name: str
    version: str

    def initialize_result(self, requested_version: Any = None) -> dict[str, Any]:
        version = requested_version if isinstance(requested_version, str) and requested_version else PROTOCOL_VERSION
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self.name, "version": self.version},
        }

@dataclass
class Request:
    method: str
    params: dict[str, Any]
    id: Any = None
    is_notification: bool = False

    @staticmethod
    def from_obj(obj: Any) -> "Request":
        """Parse a JSON-RPC request object. Raises ProtocolError when malformed."""
        if not isinstance(obj, dict):
            raise ProtocolError(INVALID_REQUEST, "Invalid Request: expected a JSON object")
        rid = obj.get("id")
        method = obj.get("method")
        if not isinstance(method, str) or not method:
            raise ProtocolError(INVALID_REQUEST, "Invalid Request: missing method", rid)
        params = obj.get("params")
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise ProtocolError(INVALID_REQUEST, "Invalid Request: params must be an object", rid)
        return Request(method=method, params=params, id=rid, is_notification="id" not in obj)

class ProtocolError(Exception):
    def __init__(self, code: int, message: str, rid: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.id = rid

    @staticmethod
    def parse_error(detail: str) -> "ProtocolError":
        return ProtocolError(PARSE_ERROR, f"Parse error: {detail}")

def response(rid: Any, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rid, "result": result}

def error_response(rid: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rid, "error": {"code": code, "message": message}}
