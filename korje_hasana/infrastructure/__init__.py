"""
Infrastructure package for the Korje Hasana client.

Centralizes HTTP connectivity concerns (client construction, timeouts, retry,
status and body checks). Keep this layer focused on I/O, decoupled from the
record and statistics logic.
"""

from korje_hasana.infrastructure.http import (
    build_async_client,
    get_json,
    post_json,
    request_json,
)

__all__ = [
    "build_async_client",
    "get_json",
    "post_json",
    "request_json",
]
