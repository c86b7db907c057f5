from __future__ import annotations
from typing import BinaryIO, Protocol

class ObjectStorePort(Protocol):
    """Put-only object storage. Failures surface as ObjectStoreFailure."""
    def put(self, key: str, body: BinaryIO, content_type: str) -> None: ...

    def locator(self, key: str) -> str: ...
