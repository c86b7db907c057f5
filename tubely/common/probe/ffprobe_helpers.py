# tubely/common/probe/ffprobe_helpers.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from tubely.domain.entities.probe import StreamDescriptor


def build_ffprobe_cmd(
    input_path: str | Path,
    *,
    ffprobe_bin: str = "ffprobe",
    log_level: str = "error",
    extra_args: Iterable[str] | None = None,
) -> List[str]:
    """
    Build an ffprobe command that emits the video streams as JSON.
    """
    if isinstance(input_path, Path):
        input_path = str(input_path)
    base = [
        ffprobe_bin,
        "-v", log_level,
        "-select_streams", "v",
        "-show_streams",
        "-print_format", "json",
        "--",  # Stop option parsing in case of weird filenames
        input_path,
    ]
    if extra_args:
        # Options must precede the "--" separator
        base = base[:-2] + list(extra_args) + base[-2:]
    return base


def parse_streams(data: Dict[str, Any] | None) -> List[StreamDescriptor]:
    """
    Map ffprobe's `streams` array to StreamDescriptors, preserving order.
    Non-video entries are dropped. Safe to call in unit tests with fixture JSON.
    """
    if not isinstance(data, dict):
        raise ValueError("ffprobe output is not a JSON object")
    streams = data.get("streams") or []
    if not isinstance(streams, list):
        raise ValueError("ffprobe 'streams' is not a list")

    out: List[StreamDescriptor] = []
    for s in streams:
        if not isinstance(s, dict):
            continue
        codec_type = s.get("codec_type")
        if codec_type not in (None, "video"):
            continue
        out.append(
            StreamDescriptor(
                index=_maybe_int(s.get("index")),
                codec_type=codec_type,
                codec_name=s.get("codec_name"),
                width=_maybe_int(s.get("width")),
                height=_maybe_int(s.get("height")),
                display_aspect_ratio=s.get("display_aspect_ratio") or None,
            )
        )
    return out


def _maybe_int(x) -> Optional[int]:
    try:
        if x is None:
            return None
        return int(float(x))
    except (TypeError, ValueError):
        return None
