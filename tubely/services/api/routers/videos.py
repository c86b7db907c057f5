# tubely/services/api/routers/videos.py
from __future__ import annotations

from http import HTTPStatus
from uuid import UUID

from fastapi import APIRouter, Depends

from tubely.common.settings import get_settings
from tubely.domain.errors import Forbidden, NotFound, TubelyError
from tubely.domain.ports.videos import VideoRepoPort
from tubely.services.api.deps import get_current_user_id, get_video_repo, raise_http
from tubely.services.api.routers.uploads import video_id_path
from tubely.services.schemas.videos import VideoCreate, VideoRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/videos", tags=["videos"])


@router.post("", response_model=VideoRead, status_code=HTTPStatus.CREATED)
def create_video(
    payload: VideoCreate,
    user_id: UUID = Depends(get_current_user_id),
    videos: VideoRepoPort = Depends(get_video_repo),
) -> VideoRead:
    try:
        video = videos.create(user_id=user_id, title=payload.title, description=payload.description)
    except TubelyError as e:
        raise_http(e)
    return VideoRead.model_validate(video)


@router.get("/{video_id}", response_model=VideoRead)
def get_video(
    video_id: UUID = Depends(video_id_path),
    user_id: UUID = Depends(get_current_user_id),
    videos: VideoRepoPort = Depends(get_video_repo),
) -> VideoRead:
    video = videos.get(video_id)
    if video is None:
        raise_http(NotFound("Couldn't get video"))
    if not video.is_owned_by(user_id):
        raise_http(Forbidden("You can't view another user's video"))
    return VideoRead.model_validate(video)
