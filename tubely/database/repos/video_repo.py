# tubely/database/repos/video_repo.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tubely.common.logging import get_logger
from tubely.database.models.video import Video as DBVideo
from tubely.domain.entities.video import Video as DomainVideo
from tubely.domain.errors import MetadataCommitFailure
from tubely.domain.ports.videos import VideoRepoPort

logger = get_logger()


def to_domain_video(row: DBVideo) -> DomainVideo:
    return DomainVideo(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        thumbnail_url=row.thumbnail_url,
        video_url=row.video_url,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyVideoRepo(VideoRepoPort):
    """
    SQLAlchemy-backed metadata store for video records.

    Writes commit before returning, so a caller only sees a record once it is
    durable. After a failed write the session needs a rollback, which is left
    to whoever owns the session.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, video_id: UUID) -> Optional[DomainVideo]:
        row = self.db.get(DBVideo, video_id)
        return to_domain_video(row) if row else None

    def create(self, *, user_id: UUID, title: str, description: Optional[str] = None) -> DomainVideo:
        row = DBVideo(user_id=user_id, title=title, description=description)
        try:
            self.db.add(row)
            self.db.flush()
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            logger.exception("Couldn't create video for user %s", user_id)
            raise MetadataCommitFailure("Couldn't create video") from e
        return to_domain_video(row)

    def update(self, video: DomainVideo) -> DomainVideo:
        try:
            row = self.db.get(DBVideo, video.id)
            if row is None:
                raise MetadataCommitFailure(f"Video {video.id} no longer exists")
            row.title = video.title
            row.description = video.description
            row.thumbnail_url = video.thumbnail_url
            row.video_url = video.video_url
            self.db.flush()
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            logger.exception("Couldn't update video %s", video.id)
            raise MetadataCommitFailure(f"Couldn't update video {video.id}") from e
        return to_domain_video(row)
