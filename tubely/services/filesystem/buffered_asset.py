# tubely/services/filesystem/buffered_asset.py
from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

from tubely.common.logging import get_logger
from tubely.domain.errors import PayloadTooLarge, StorageIOFailure

logger = get_logger()

TEMP_PREFIX = "tubely-upload-"


@dataclass
class BufferedAsset:
    """Local, seekable copy of an upload. Valid only inside `buffered_asset()`."""
    path: Path
    file: BinaryIO
    size: int = 0

    def rewind(self) -> None:
        try:
            self.file.seek(0, os.SEEK_SET)
        except OSError as e:
            raise StorageIOFailure("There was an issue reading the buffered file") from e


def _remove_quietly(tmp: BinaryIO, path: Path) -> None:
    try:
        tmp.close()
    except OSError as e:
        logger.warning("Couldn't close temp file %s: %s", path, e)
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Couldn't remove temp file %s: %s", path, e)


@contextmanager
def buffered_asset(
    source: BinaryIO,
    *,
    temp_dir: Path,
    max_bytes: int,
    suffix: str = "",
    chunk_size: int = 1 << 20,
    fsync: bool = True,
) -> Iterator[BufferedAsset]:
    """
    Copy `source` into a uniquely named temp file under `temp_dir` and yield it
    rewound to offset 0. The file is flushed (and fsync'd) before it is yielded,
    so external readers see the full content. Removal happens on every exit.

    Raises PayloadTooLarge once more than `max_bytes` have been read, and
    StorageIOFailure for any local I/O error.
    """
    try:
        temp_dir.mkdir(parents=True, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(
            mode="w+b", prefix=TEMP_PREFIX, suffix=suffix, dir=str(temp_dir), delete=False
        )
    except OSError as e:
        raise StorageIOFailure("Couldn't create temp file") from e

    path = Path(tmp.name)
    try:
        written = 0
        try:
            for chunk in iter(lambda: source.read(chunk_size), b""):
                written += len(chunk)
                if written > max_bytes:
                    raise PayloadTooLarge(f"Upload exceeds the {max_bytes} byte limit")
                tmp.write(chunk)
            tmp.flush()
            if fsync:
                os.fsync(tmp.fileno())
        except OSError as e:
            raise StorageIOFailure("Couldn't write temp file") from e

        asset = BufferedAsset(path=path, file=tmp, size=written)
        asset.rewind()
        yield asset
    finally:
        _remove_quietly(tmp, path)
