# tubely/services/api/routers/uploads.py
from __future__ import annotations

from http import HTTPStatus
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, Path, UploadFile

from tubely.common.settings import get_settings
from tubely.domain.dataclasses.ingest import Upload
from tubely.domain.errors import TubelyError
from tubely.services.api.deps import get_current_user_id, get_ingest_pipeline, parse_video_id, raise_http
from tubely.services.ingest.pipeline import IngestPipeline
from tubely.services.schemas.videos import VideoRead

cfg = get_settings()
router = APIRouter(prefix=cfg.api.prefix, tags=["uploads"])


def video_id_path(video_id: str = Path(..., description="Target video record id")) -> UUID:
    try:
        return parse_video_id(video_id)
    except TubelyError as e:
        raise_http(e)


def _to_upload(file: Optional[UploadFile]) -> Upload:
    if file is None:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail="Couldn't get file")
    return Upload(
        stream=file.file,
        content_type=file.content_type or "",
        filename=file.filename,
        size=file.size,
    )


@router.post("/thumbnail_upload/{video_id}", response_model=VideoRead)
def upload_thumbnail(
    video_id: UUID = Depends(video_id_path),
    user_id: UUID = Depends(get_current_user_id),
    thumbnail: Optional[UploadFile] = File(None),
    pipeline: IngestPipeline = Depends(get_ingest_pipeline),
) -> VideoRead:
    upload = _to_upload(thumbnail)
    try:
        result = pipeline.ingest_thumbnail(video_id, user_id, upload)
    except TubelyError as e:
        raise_http(e)
    return VideoRead.model_validate(result.video)


@router.post("/video_upload/{video_id}", response_model=VideoRead)
def upload_video(
    video_id: UUID = Depends(video_id_path),
    user_id: UUID = Depends(get_current_user_id),
    video: Optional[UploadFile] = File(None),
    pipeline: IngestPipeline = Depends(get_ingest_pipeline),
) -> VideoRead:
    upload = _to_upload(video)
    try:
        result = pipeline.ingest_video(video_id, user_id, upload)
    except TubelyError as e:
        raise_http(e)
    return VideoRead.model_validate(result.video)
