# tubely/services/probe/ffprobe_adapter.py
from __future__ import annotations

import json
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from tubely.common.logging import get_logger
from tubely.common.probe.ffprobe_helpers import build_ffprobe_cmd, parse_streams
from tubely.common.settings import get_settings
from tubely.domain.entities.probe import StreamDescriptor
from tubely.domain.errors import ProbeFailure
from tubely.domain.ports.probe import MediaProbePort

logger = get_logger()


class FFprobeError(ProbeFailure):
    """Adapter-level error for probe failures."""


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    Blocking; one subprocess per call, no shared state.
    """

    def __init__(self, ffprobe_bin: Optional[str] = None, timeout_sec: Optional[int] = None,
                 log_level: Optional[str] = None):
        cfg = get_settings()
        self.ffprobe_bin = ffprobe_bin or cfg.ffprobe.bin
        self.timeout_sec = int(timeout_sec or cfg.ffprobe.timeout_sec or 15)
        self.log_level = log_level or cfg.ffprobe.log_level

    def _resolve_bin(self) -> str:
        # absolute paths are used as-is; bare names go through PATH
        if Path(self.ffprobe_bin).is_absolute():
            if not Path(self.ffprobe_bin).is_file():
                raise FFprobeError(f"ffprobe not found at {self.ffprobe_bin}")
            return self.ffprobe_bin
        resolved = shutil.which(self.ffprobe_bin)
        if not resolved:
            raise FFprobeError("ffprobe not found on PATH; set FFPROBE__BIN or install ffmpeg.")
        return resolved

    def is_available(self) -> bool:
        try:
            self._resolve_bin()
        except FFprobeError:
            return False
        return True

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: Path) -> List[StreamDescriptor]:
        if not path:
            raise FFprobeError("No path provided to probe().")
        if not Path(path).is_file():
            raise FFprobeError(f"File not found: {path}")

        cmd = build_ffprobe_cmd(path, ffprobe_bin=self._resolve_bin(), log_level=self.log_level)
        logger.debug("ffprobe cmd: %s", " ".join(shlex.quote(p) for p in cmd))

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
                check=False,  # we handle rc manually to attach stderr
            )
        except subprocess.TimeoutExpired as e:
            raise FFprobeError(f"ffprobe timed out after {self.timeout_sec}s", stderr=str(e)) from e
        except OSError as e:
            raise FFprobeError("Failed to execute ffprobe (OS error).", stderr=str(e)) from e

        if proc.returncode != 0:
            raise FFprobeError("ffprobe returned non-zero exit code", stderr=proc.stderr, rc=proc.returncode)

        try:
            data = json.loads(proc.stdout or "{}")
            return parse_streams(data)
        except (json.JSONDecodeError, ValueError) as e:
            raise FFprobeError("ffprobe produced invalid JSON", stderr=proc.stdout) from e
