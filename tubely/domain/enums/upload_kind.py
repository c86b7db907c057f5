from __future__ import annotations
from enum import StrEnum

class UploadKind(StrEnum):
    thumbnail = "thumbnail"
    video = "video"
