# tubely/domain/policies/aspect_classifier.py
from __future__ import annotations

from typing import Optional, Sequence

from tubely.domain.entities.probe import StreamDescriptor
from tubely.domain.enums.aspect_class import AspectClass

_EXACT_RATIOS = {
    "16:9": AspectClass.landscape,
    "9:16": AspectClass.portrait,
}


def classify_aspect_ratio(ratio: Optional[str]) -> AspectClass:
    """Exact match only: "16:9" and "9:16" are recognized, everything else is `other`."""
    if not ratio:
        return AspectClass.other
    return _EXACT_RATIOS.get(ratio, AspectClass.other)


def classify_streams(streams: Sequence[StreamDescriptor] | None) -> AspectClass:
    """
    Classify by the first declared video stream. Later streams are ignored,
    so multi-stream files take the shape of stream 0.
    """
    if not streams:
        return AspectClass.other
    return classify_aspect_ratio(streams[0].display_aspect_ratio)
