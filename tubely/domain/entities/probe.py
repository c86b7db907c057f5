# tubely/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StreamDescriptor:
    """
    One video stream as reported by a media probe (e.g., ffprobe).
    Framework-free; produced by an adapter, consumed by the aspect classifier.
    """
    index: Optional[int] = None
    codec_type: Optional[str] = None
    codec_name: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    display_aspect_ratio: Optional[str] = None
