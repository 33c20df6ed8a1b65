"""
JSON-RPC Gateway Endpoints

MCP-style streamable HTTP transport, stateless: every POST carries one
JSON-RPC request and gets one JSON response.
"""

import asyncio
import json
import logging
import time
import uuid
from typing import Optional

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from tradetools.core.config import settings
from tradetools.core.context import RequestContext, request_context
from tradetools.schemas.rpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    UNAUTHORIZED,
    JsonRpcRequest,
    request_id_of,
    rpc_error,
    rpc_result,
)
from tradetools.tools import registry

logger = logging.getLogger(__name__)

router = APIRouter()

UNAUTHORIZED_MESSAGE = (
    "Unauthorized - Missing API key. Provide via Authorization: Bearer <key>, "
    "X-Api-Key header, or api_key query parameter"
)


def extract_api_key(request: Request) -> Optional[str]:
    """Bearer token, then X-Api-Key / Api-Key headers, then api_key / apiKey query."""
    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()

    for header in ("x-api-key", "api-key"):
        if request.headers.get(header):
            return request.headers[header]

    for param in ("api_key", "apiKey"):
        if request.query_params.get(param):
            return request.query_params[param]
    return None


async def dispatch(rpc: JsonRpcRequest) -> dict:
    """Route one validated JSON-RPC request to its method."""
    params = rpc.params or {}

    if rpc.method == "initialize":
        return rpc_result(
            rpc.id,
            {
                "protocolVersion": params.get("protocolVersion") or PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": {"name": settings.app_name, "version": settings.app_version},
            },
        )

    if rpc.method == "ping":
        return rpc_result(rpc.id, {})

    if rpc.method == "tools/list":
        return rpc_result(rpc.id, {"tools": registry.list_tools()})

    if rpc.method == "tools/call":
        name = params.get("name")
        tool = registry.get(name) if isinstance(name, str) else None
        if tool is None:
            return rpc_error(rpc.id, INVALID_PARAMS, f"Unknown tool: {name}")
        arguments = params.get("arguments")
        return rpc_result(rpc.id, await registry.call(tool, arguments if isinstance(arguments, dict) else {}))

    return rpc_error(rpc.id, METHOD_NOT_FOUND, f"Method not found: {rpc.method}")


@router.post("/")
@router.post("/mcp")
async def handle_rpc(request: Request):
    """Authenticate, validate and dispatch one JSON-RPC request."""
    start = time.monotonic()
    user_id = request.query_params.get("id")

    raw = await request.body()
    try:
        body = json.loads(raw) if raw else {}
    except ValueError:
        return JSONResponse(rpc_error(None, PARSE_ERROR, "Parse error"), status_code=400)

    request_id = request_id_of(body)

    api_key = extract_api_key(request)
    if not api_key:
        logger.error({"message": "Missing API key", "userId": user_id})
        return JSONResponse(rpc_error(request_id, UNAUTHORIZED, UNAUTHORIZED_MESSAGE), status_code=401)

    if not isinstance(body, dict) or body.get("jsonrpc") != JSONRPC_VERSION:
        return JSONResponse(
            rpc_error(request_id, INVALID_REQUEST, "Invalid Request - must be JSON-RPC 2.0"),
            status_code=400,
        )
    try:
        rpc = JsonRpcRequest.model_validate({**body, "id": request_id})
    except PydanticValidationError:
        return JSONResponse(
            rpc_error(request_id, INVALID_REQUEST, "Invalid Request - method must be a string and params an object"),
            status_code=400,
        )

    logger.info({"message": "Processing MCP request", "method": rpc.method, "userId": user_id, "requestId": request_id})

    if rpc.is_notification:
        return Response(status_code=202)

    try:
        with request_context(RequestContext(api_key=api_key, user_id=user_id)):
            response = await asyncio.wait_for(dispatch(rpc), timeout=settings.request_timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning(
            {"message": "Request timeout", "method": rpc.method, "durationMs": int((time.monotonic() - start) * 1000)}
        )
        return JSONResponse(rpc_error(None, INTERNAL_ERROR, "Request timeout"), status_code=504)
    except Exception as e:
        logger.exception({"message": "MCP request error", "error": str(e), "requestId": request_id})
        return JSONResponse(rpc_error(request_id, INTERNAL_ERROR, str(e) or "Internal server error"), status_code=500)

    logger.info(
        {
            "message": "MCP request completed",
            "method": rpc.method,
            "userId": user_id,
            "requestId": request_id,
            "hasError": "error" in response,
            "durationMs": int((time.monotonic() - start) * 1000),
        }
    )

    headers = {}
    if rpc.method == "initialize" and "result" in response:
        headers["Mcp-Session-Id"] = str(uuid.uuid4())
    return JSONResponse(response, headers=headers)


@router.delete("/mcp")
async def end_session():
    """Stateless transport: nothing to tear down."""
    return Response(status_code=200)
