from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from tubely.database.repos.video_repo import SqlAlchemyVideoRepo
from tubely.domain.entities.video import Video
from tubely.domain.errors import MetadataCommitFailure


def test_create_and_get(db):
    repo = SqlAlchemyVideoRepo(db)
    owner = uuid.uuid4()
    created = repo.create(user_id=owner, title="Boots", description="hiking")

    got = repo.get(created.id)
    assert got is not None
    assert got.user_id == owner
    assert got.title == "Boots"
    assert got.video_url is None and got.thumbnail_url is None
    assert got.is_owned_by(owner)
    assert not got.is_owned_by(uuid.uuid4())


def test_get_missing_returns_none(db):
    assert SqlAlchemyVideoRepo(db).get(uuid.uuid4()) is None


def test_update_sets_locators(db):
    repo = SqlAlchemyVideoRepo(db)
    v = repo.create(user_id=uuid.uuid4(), title="t")
    v.video_url = "https://b.s3.r.amazonaws.com/landscape/k.mp4"
    v.thumbnail_url = "https://b.s3.r.amazonaws.com/k.png"

    updated = repo.update(v)

    assert updated.video_url == v.video_url
    again = repo.get(v.id)
    assert again.thumbnail_url == "https://b.s3.r.amazonaws.com/k.png"


def test_update_of_vanished_record_fails(db):
    repo = SqlAlchemyVideoRepo(db)
    with pytest.raises(MetadataCommitFailure):
        repo.update(Video(id=uuid.uuid4(), user_id=uuid.uuid4(), title="ghost"))


def test_sqlalchemy_error_wrapped(db, monkeypatch):
    repo = SqlAlchemyVideoRepo(db)
    v = repo.create(user_id=uuid.uuid4(), title="t")

    def _flush_fails(*a, **k):
        raise OperationalError("UPDATE videos", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "flush", _flush_fails)
    v.video_url = "https://x/y.mp4"
    with pytest.raises(MetadataCommitFailure):
        repo.update(v)


def test_update_is_committed(committing_db):
    repo = SqlAlchemyVideoRepo(committing_db)
    v = repo.create(user_id=uuid.uuid4(), title="t")
    v.video_url = "https://b.s3.r.amazonaws.com/portrait/k.mp4"

    repo.update(v)
    # a rollback after update() must not undo it
    committing_db.rollback()

    assert repo.get(v.id).video_url == "https://b.s3.r.amazonaws.com/portrait/k.mp4"


def test_failed_commit_is_wrapped_and_not_applied(committing_db, monkeypatch):
    repo = SqlAlchemyVideoRepo(committing_db)
    v = repo.create(user_id=uuid.uuid4(), title="t")

    def _commit_fails():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    v.video_url = "https://x/y.mp4"
    with monkeypatch.context() as m:
        m.setattr(committing_db, "commit", _commit_fails)
        with pytest.raises(MetadataCommitFailure):
            repo.update(v)

    committing_db.rollback()
    assert repo.get(v.id).video_url is None
