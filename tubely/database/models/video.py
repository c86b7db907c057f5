from __future__ import annotations

from typing import Optional
from uuid import UUID as UUID_t

from sqlalchemy import Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from tubely.database.core.main import Base
from tubely.database.core.service_object import ServiceObject


class Video(ServiceObject, Base):
    __tablename__ = "videos"
    __table_args__ = (Index("ix_videos_user_id", "user_id"),)

    user_id: Mapped[UUID_t] = mapped_column(Uuid(as_uuid=True), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[Optional[str]] = mapped_column(Text)

    # public locators, set by the ingestion pipeline
    thumbnail_url: Mapped[Optional[str]] = mapped_column(Text)
    video_url: Mapped[Optional[str]] = mapped_column(Text)
