# tubely/services/api/routers/health.py
from __future__ import annotations

import os

from fastapi import APIRouter, Depends

from tubely.common.settings import get_settings
from tubely.services.api.deps import get_media_probe
from tubely.services.probe.ffprobe_adapter import FFprobeAdapter

router = APIRouter()


@router.get("/healthz")
def healthz(probe: FFprobeAdapter = Depends(get_media_probe)):
    """
    Liveness plus the local prerequisites of an upload. A missing ffprobe only
    degrades classification to "other", so it does not flip `ok`.
    """
    s = get_settings()
    temp_root = s.temp_root
    writable = temp_root.is_dir() and os.access(temp_root, os.W_OK)
    return {
        "ok": writable,
        "app": s.app_name,
        "env": s.app_env,
        "storage": s.storage_backend,
        "ffprobe": probe.is_available(),
        "temp_root_writable": writable,
    }
