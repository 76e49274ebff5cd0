"""
Adapters package - External service connections.
Identity provider token verification and the chat completion API.
"""

from adapters import completion_adapter, identity_adapter

__all__ = [
    "completion_adapter",
    "identity_adapter",
]
