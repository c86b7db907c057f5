from __future__ import annotations
from typing import Optional, Protocol
from uuid import UUID
from tubely.domain.entities.video import Video

class VideoRepoPort(Protocol):
    def get(self, video_id: UUID) -> Optional[Video]: ...

    def create(self, *, user_id: UUID, title: str, description: Optional[str] = None) -> Video: ...

    # Raises MetadataCommitFailure when the write does not go through
    def update(self, video: Video) -> Video: ...
