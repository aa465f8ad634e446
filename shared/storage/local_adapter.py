"""Filesystem-backed object storage for development and tests."""

import asyncio
from pathlib import Path

from .port import ObjectStorage, StoredObject


class LocalObjectStorage(ObjectStorage):

    def __init__(self, root: str, public_url: str) -> None:
        self.root = Path(root)
        self.public_url = public_url.rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise ValueError(f"Invalid object key: {key}")
        return path

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        path = self._path_for(key)
        await asyncio.to_thread(self._write, path, data)
        return StoredObject(key=key, url=f"{self.public_url}/{key}")
