# tests/conftest.py
from __future__ import annotations

import os
import tempfile
import uuid
from typing import Dict, List, Optional

import pytest

# Settings are cached on first use and read at import time by the routers,
# so the environment has to be in place before any tubely import.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATA_ROOT", tempfile.mkdtemp(prefix="tubely-tests-"))
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("STORAGE_BACKEND", "memory")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tubely.common.settings import UploadLimits  # noqa: E402
from tubely.database.models import Base  # noqa: E402
from tubely.domain.entities.probe import StreamDescriptor  # noqa: E402
from tubely.domain.entities.video import Video  # noqa: E402
from tubely.domain.errors import MetadataCommitFailure, ObjectStoreFailure, ProbeFailure  # noqa: E402
from tubely.services.storage.memory_object_store import MemoryObjectStore  # noqa: E402


# ---------------------------- database ----------------------------------------

@pytest.fixture(scope="session")
def db_engine() -> Engine:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db(db_engine) -> Session:
    """
    Per-test Session bound to a transaction that is rolled back afterwards.
    """
    connection = db_engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, future=True)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def committing_db(db_engine) -> Session:
    """
    Session bound straight to the engine, so commits really land. Rows are
    deleted afterwards.
    """
    session = Session(bind=db_engine, future=True, expire_on_commit=False)
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


# ---------------------------- test doubles ------------------------------------

class FakeVideoRepo:
    """Dict-backed VideoRepoPort that records updates."""

    def __init__(self) -> None:
        self.rows: Dict[uuid.UUID, Video] = {}
        self.updates: List[Video] = []
        self.fail_update = False

    def add(self, user_id: uuid.UUID, title: str = "test video") -> Video:
        v = Video(id=uuid.uuid4(), user_id=user_id, title=title)
        self.rows[v.id] = v
        return v

    def get(self, video_id: uuid.UUID) -> Optional[Video]:
        v = self.rows.get(video_id)
        # hand out copies so the pipeline can't mutate "stored" state in place
        return Video(**v.as_dict()) if v else None

    def create(self, *, user_id: uuid.UUID, title: str, description: Optional[str] = None) -> Video:
        v = self.add(user_id, title)
        v.description = description
        return Video(**v.as_dict())

    def update(self, video: Video) -> Video:
        if self.fail_update:
            raise MetadataCommitFailure("simulated commit failure")
        self.updates.append(video)
        self.rows[video.id] = Video(**video.as_dict())
        return video


class RecordingStore(MemoryObjectStore):
    """MemoryObjectStore that also records put() calls and can be told to fail."""

    def __init__(self) -> None:
        super().__init__(base_url="http://testserver", route_prefix="/api/assets")
        self.calls: List[tuple[str, str]] = []
        self.fail = False

    def put(self, key, body, content_type):
        self.calls.append((key, content_type))
        if self.fail:
            raise ObjectStoreFailure("simulated store outage")
        super().put(key, body, content_type)


class FakeProbe:
    """MediaProbePort double: returns fixed streams or raises ProbeFailure."""

    def __init__(self, ratios: Optional[List[Optional[str]]] = None, error: Optional[str] = None) -> None:
        self.ratios = ratios if ratios is not None else []
        self.error = error
        self.paths: list = []
        self.seen_bytes: List[bytes] = []

    def probe(self, path):
        self.paths.append(path)
        self.seen_bytes.append(path.read_bytes())
        if self.error:
            raise ProbeFailure(self.error)
        return [
            StreamDescriptor(index=i, codec_type="video", display_aspect_ratio=r)
            for i, r in enumerate(self.ratios)
        ]


@pytest.fixture()
def video_repo() -> FakeVideoRepo:
    return FakeVideoRepo()


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture()
def owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture()
def temp_dir(tmp_path):
    d = tmp_path / "buffer"
    d.mkdir()
    return d


@pytest.fixture()
def limits() -> UploadLimits:
    return UploadLimits(max_video_bytes=64 * 1024, max_thumbnail_bytes=8 * 1024, chunk_size=1024, fsync=False)


@pytest.fixture()
def make_probe():
    return FakeProbe
