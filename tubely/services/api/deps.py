# tubely/services/api/deps.py
from __future__ import annotations

from functools import lru_cache
from typing import Generator, NoReturn
from uuid import UUID

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tubely.common.settings import get_settings
from tubely.database.core.main import get_sessionmaker
from tubely.database.repos.video_repo import SqlAlchemyVideoRepo
from tubely.domain.errors import InvalidIdentifier, TubelyError, Unauthenticated
from tubely.domain.ports.object_store import ObjectStorePort
from tubely.domain.ports.probe import MediaProbePort
from tubely.domain.ports.videos import VideoRepoPort
from tubely.services.auth.tokens import validate_access_token
from tubely.services.ingest.pipeline import IngestPipeline
from tubely.services.probe.ffprobe_adapter import FFprobeAdapter
from tubely.services.storage.memory_object_store import MemoryObjectStore
from tubely.services.storage.s3_object_store import S3ObjectStore

http_bearer = HTTPBearer(auto_error=False)


def raise_http(err: TubelyError) -> NoReturn:
    """Translate a domain error into the HTTP response FastAPI renders."""
    raise HTTPException(status_code=err.status_code, detail=err.message) from err


def parse_video_id(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError as e:
        raise InvalidIdentifier("Invalid ID") from e


def get_media_probe() -> MediaProbePort:
    """
    Provide a MediaProbePort implementation (ffprobe) via DI.
    """
    return FFprobeAdapter()


@lru_cache(maxsize=1)
def _memory_store() -> MemoryObjectStore:
    cfg = get_settings()
    return MemoryObjectStore(base_url=cfg.api.base_url, route_prefix=f"{cfg.api.prefix}/assets")


def get_memory_store() -> MemoryObjectStore | None:
    return _memory_store() if get_settings().storage_backend == "memory" else None


def get_object_store() -> ObjectStorePort:
    if get_settings().storage_backend == "memory":
        return _memory_store()
    return S3ObjectStore()


def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped Session. Repository writes commit themselves; anything left
    uncommitted (e.g. after a failed write) is rolled back on close.
    """
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()


def get_video_repo(session: Session = Depends(get_db)) -> VideoRepoPort:
    return SqlAlchemyVideoRepo(session)


def get_current_user_id(
    creds: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> UUID:
    if creds is None or not creds.credentials:
        raise_http(Unauthenticated("Couldn't find JWT"))
    try:
        return validate_access_token(creds.credentials)
    except Unauthenticated as e:
        raise_http(e)


def get_ingest_pipeline(
    videos: VideoRepoPort = Depends(get_video_repo),
    store: ObjectStorePort = Depends(get_object_store),
    probe: MediaProbePort = Depends(get_media_probe),
) -> IngestPipeline:
    return IngestPipeline(videos=videos, store=store, probe=probe)
