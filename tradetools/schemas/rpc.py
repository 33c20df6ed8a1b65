"""
CONTRACT 3: JSON-RPC 2.0 envelope

Input:  JsonRpcRequest (POST body)
Output: JSON-RPC response dict (result or error)
"""

from typing import Any, Optional, Union
from pydantic import BaseModel

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2025-03-26"

# Error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
UNAUTHORIZED = -32001

RequestId = Union[int, str]


class JsonRpcRequest(BaseModel):
    """A single JSON-RPC 2.0 request or notification."""

    jsonrpc: str
    method: str
    id: Optional[RequestId] = None
    params: Optional[dict] = None

    @property
    def is_notification(self) -> bool:
        return self.method.startswith("notifications/")


def request_id_of(body: Any) -> Optional[RequestId]:
    """Best-effort request id from an unvalidated body: only strings and integers count."""
    if not isinstance(body, dict):
        return None
    value = body.get("id")
    if isinstance(value, bool):
        return None
    return value if isinstance(value, (int, str)) else None


def rpc_result(request_id: Optional[RequestId], result: Any) -> dict:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def rpc_error(request_id: Optional[RequestId], code: int, message: str) -> dict:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }
