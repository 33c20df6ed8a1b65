"""
API v1 Router

JSON-RPC tool gateway endpoints.
"""

from fastapi import APIRouter

from tradetools.api.v1.endpoints import rpc

router = APIRouter()

router.include_router(rpc.router, tags=["JSON-RPC"])
