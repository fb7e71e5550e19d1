"""Client for the cafe POS API with local fallback."""

from cafe_pos.client.backend import PosBackend
from cafe_pos.client.fallback import FallbackPosClient
from cafe_pos.client.local import LocalBackend
from cafe_pos.client.remote import RemoteBackend, RemoteUnavailableError

__all__ = [
    "PosBackend",
    "FallbackPosClient",
    "LocalBackend",
    "RemoteBackend",
    "RemoteUnavailableError",
]
