from __future__ import annotations
from enum import StrEnum

class AspectClass(StrEnum):
    landscape = "landscape"
    portrait = "portrait"
    other = "other"
