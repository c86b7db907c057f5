# tubely/services/ingest/pipeline.py
from __future__ import annotations

from pathlib import Path
from typing import Optional
from uuid import UUID

from tubely.common.logging import get_logger
from tubely.common.settings import UploadLimits, get_settings
from tubely.domain.dataclasses.ingest import IngestResult, Upload
from tubely.domain.entities.video import Video
from tubely.domain.enums.aspect_class import AspectClass
from tubely.domain.enums.upload_kind import UploadKind
from tubely.domain.errors import Forbidden, NotFound, PayloadTooLarge, ProbeFailure, UnsupportedMediaType
from tubely.domain.policies.aspect_classifier import classify_streams
from tubely.domain.policies.storage_keys import derive_storage_key, extension_for_media_type, parse_media_type
from tubely.domain.ports.object_store import ObjectStorePort
from tubely.domain.ports.probe import MediaProbePort
from tubely.domain.ports.videos import VideoRepoPort
from tubely.services.filesystem.buffered_asset import BufferedAsset, buffered_asset

logger = get_logger()


class IngestPipeline:
    """
    Upload -> temp file -> (probe/classify) -> storage key -> object store -> record.

    One instance per request; all collaborators are injected so the same code
    path serves S3 and the in-memory store. Every step blocks the calling thread.
    """

    def __init__(
        self,
        *,
        videos: VideoRepoPort,
        store: ObjectStorePort,
        probe: MediaProbePort,
        temp_dir: Optional[Path] = None,
        limits: Optional[UploadLimits] = None,
    ) -> None:
        cfg = get_settings()
        self.videos = videos
        self.store = store
        self.probe = probe
        self.temp_dir = Path(temp_dir) if temp_dir is not None else cfg.temp_root
        self.limits = limits or cfg.uploads

    # ---- public operations ------------------------------------------------------
    def ingest_video(self, video_id: UUID, user_id: UUID, upload: Upload) -> IngestResult:
        limits = self.limits
        logger.info("uploading video %s by user %s (file=%r)", video_id, user_id, upload.filename)

        self._check_declared_size(upload, limits.max_video_bytes)
        media_type = parse_media_type(upload.content_type)
        if media_type != limits.video_media_type:
            raise UnsupportedMediaType(f"Invalid media type {media_type!r}; expected {limits.video_media_type}")
        video = self._authorize(video_id, user_id, UploadKind.video)

        with self._buffer(upload, limits.max_video_bytes, f".{limits.video_ext}") as asset:
            classification = self._classify(asset)
            key = derive_storage_key(limits.video_ext, prefix=classification.value)
            locator = self._commit(asset, key, upload.content_type)

        video.video_url = locator
        video = self.videos.update(video)
        return IngestResult(video=video, key=key, locator=locator, classification=classification)

    def ingest_thumbnail(self, video_id: UUID, user_id: UUID, upload: Upload) -> IngestResult:
        limits = self.limits
        logger.info("uploading thumbnail for video %s by user %s (file=%r)", video_id, user_id, upload.filename)

        self._check_declared_size(upload, limits.max_thumbnail_bytes)
        media_type = parse_media_type(upload.content_type)
        if not media_type.startswith(limits.thumbnail_type_prefix):
            raise UnsupportedMediaType(
                f"Invalid media type {media_type!r}; expected {limits.thumbnail_type_prefix}*"
            )
        ext = extension_for_media_type(media_type)
        video = self._authorize(video_id, user_id, UploadKind.thumbnail)

        with self._buffer(upload, limits.max_thumbnail_bytes, f".{ext}") as asset:
            key = derive_storage_key(ext)
            locator = self._commit(asset, key, upload.content_type)

        video.thumbnail_url = locator
        video = self.videos.update(video)
        return IngestResult(video=video, key=key, locator=locator)

    # ---- steps ------------------------------------------------------------------
    @staticmethod
    def _check_declared_size(upload: Upload, max_bytes: int) -> None:
        if upload.size is not None and upload.size > max_bytes:
            raise PayloadTooLarge(f"Upload of {upload.size} bytes exceeds the {max_bytes} byte limit")

    def _authorize(self, video_id: UUID, user_id: UUID, kind: UploadKind) -> Video:
        video = self.videos.get(video_id)
        if video is None:
            raise NotFound(f"Couldn't find video {video_id}")
        if not video.is_owned_by(user_id):
            raise Forbidden(f"You can't upload a {kind} for another user's video")
        return video

    def _buffer(self, upload: Upload, max_bytes: int, suffix: str):
        return buffered_asset(
            upload.stream,
            temp_dir=self.temp_dir,
            max_bytes=max_bytes,
            suffix=suffix,
            chunk_size=self.limits.chunk_size,
            fsync=self.limits.fsync,
        )

    def _classify(self, asset: BufferedAsset) -> AspectClass:
        try:
            streams = self.probe.probe(asset.path)
        except ProbeFailure as e:
            logger.warning("probe failed for %s, classifying as %s: %s", asset.path.name, AspectClass.other, e)
            return AspectClass.other
        classification = classify_streams(streams)
        logger.info("classified %s as %s", asset.path.name, classification)
        return classification

    def _commit(self, asset: BufferedAsset, key: str, content_type: str) -> str:
        asset.rewind()
        self.store.put(key, asset.file, content_type)
        locator = self.store.locator(key)
        logger.info("stored %d bytes under %s", asset.size, key)
        return locator
