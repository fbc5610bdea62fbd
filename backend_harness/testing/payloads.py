"""Payload helpers for mocked backend responses in tests."""

from typing import Any


def call_result(result: Any) -> dict[str, Any]:
    """Wrap a function result the way the gateway returns it."""
    return {"result": result}


def call_error(
    *, error_type: str = "guest", message: str = "Record not found"
) -> dict[str, Any]:
    """Create an error body for a rejected call."""
    return {"type": error_type, "message": message}


def agent_info(
    *,
    pubkey: str = "uhCAkzKxX4aGSNF7WXO5RVVNPLUnbUHrzHoWYMJEjS3HHuFqhtb4c",
) -> dict[str, Any]:
    """Create a whoami result for a freshly initialized agent."""
    return {
        "agent_initial_pubkey": pubkey,
        "agent_latest_pubkey": pubkey,
        "chain_head": {"action_seq": 3, "timestamp": 4102444800000000},
    }


def post(
    *,
    message: str = "Hello world",
    author: str = "uhCAkzKxX4aGSNF7WXO5RVVNPLUnbUHrzHoWYMJEjS3HHuFqhtb4c",
    published_at: int = 4102444800000,
    last_updated: int = 4102444800000,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create a get_post result."""
    return {
        "message": message,
        "author": author,
        "published_at": published_at,
        "last_updated": last_updated,
        "metadata": metadata or {},
    }
