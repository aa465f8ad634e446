"""Object storage port.

Receives an image buffer and returns the URL it can be fetched from. The
storefront only ever talks to this interface, so the local filesystem adapter
used in development can be swapped for a bucket-backed one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredObject:
    key: str
    url: str


class ObjectStorage(ABC):
    """Abstract object storage interface."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        """Store `data` under `key` and return where it can be read."""
        ...
