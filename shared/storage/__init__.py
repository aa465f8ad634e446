from functools import lru_cache

from shared.config.settings import STORAGE_DIR, STORAGE_PUBLIC_URL

from .local_adapter import LocalObjectStorage
from .port import ObjectStorage, StoredObject


@lru_cache(maxsize=1)
def get_object_storage() -> ObjectStorage:
    return LocalObjectStorage(STORAGE_DIR, STORAGE_PUBLIC_URL)


__all__ = ["ObjectStorage", "StoredObject", "LocalObjectStorage", "get_object_storage"]
