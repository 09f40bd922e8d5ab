"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from finlar_gateway.infrastructure.clients.storage import StorageClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_storage_client() -> StorageClient:
    """Provide Storage API client instance"""
    return StorageClient()
