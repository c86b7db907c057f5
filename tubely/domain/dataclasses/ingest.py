# tubely/domain/dataclasses/ingest.py
from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Optional

from tubely.domain.entities.video import Video
from tubely.domain.enums.aspect_class import AspectClass


@dataclass
class Upload:
    """
    Inbound upload for a single request. `filename` is whatever the client
    declared and is only ever logged. `size` is the declared byte count when
    the transport knows it.
    """
    stream: BinaryIO
    content_type: str
    filename: Optional[str] = None
    size: Optional[int] = None


@dataclass(frozen=True)
class IngestResult:
    video: Video
    key: str
    locator: str
    classification: Optional[AspectClass] = None
