# tubely/domain/entities/video.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class Video:
    """
    Metadata record for an uploaded video. The ingestion pipeline never
    creates or deletes these; it only fills in the locator fields.
    """
    id: UUID
    user_id: UUID
    title: str = ""
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id

    def as_dict(self):
        return asdict(self)
