# tubely/services/storage/memory_object_store.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import BinaryIO, Dict, Optional

from tubely.domain.ports.object_store import ObjectStorePort


@dataclass(frozen=True)
class StoredObject:
    data: bytes
    content_type: str


class MemoryObjectStore(ObjectStorePort):
    """
    In-process key/value store for dev and tests. Objects are served back by
    the API under `<base_url>/api/assets/<key>`. Contents die with the process.
    """

    def __init__(self, base_url: str = "http://localhost:8091", route_prefix: str = "/api/assets"):
        self.base_url = base_url.rstrip("/")
        self.route_prefix = "/" + route_prefix.strip("/")
        self._objects: Dict[str, StoredObject] = {}
        self._lock = threading.Lock()

    def put(self, key: str, body: BinaryIO, content_type: str) -> None:
        data = body.read()
        with self._lock:
            self._objects[key] = StoredObject(data=data, content_type=content_type)

    def locator(self, key: str) -> str:
        return f"{self.base_url}{self.route_prefix}/{key.lstrip('/')}"

    def get(self, key: str) -> Optional[StoredObject]:
        with self._lock:
            return self._objects.get(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)
