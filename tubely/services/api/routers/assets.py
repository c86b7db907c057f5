# tubely/services/api/routers/assets.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Response

from tubely.common.settings import get_settings
from tubely.services.api.deps import get_memory_store
from tubely.services.storage.memory_object_store import MemoryObjectStore

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/assets", tags=["assets"])


@router.get("/{key:path}")
def get_asset(
    key: str,
    store: MemoryObjectStore | None = Depends(get_memory_store),
) -> Response:
    """Serve objects held by the in-memory store (dev backend only)."""
    obj = store.get(key) if store is not None else None
    if obj is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Asset not found")
    return Response(content=obj.data, media_type=obj.content_type)
