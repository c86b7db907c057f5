# tubely/domain/policies/storage_keys.py
from __future__ import annotations

import base64
import secrets
from typing import Optional

from tubely.domain.errors import KeyDerivationFailure, UnsupportedMediaType

KEY_RANDOM_BYTES = 32


def random_token(nbytes: int = KEY_RANDOM_BYTES) -> str:
    """
    URL-safe, unpadded base64 of `nbytes` from the OS CSPRNG
    (32 bytes -> 43 chars). Never falls back to a weaker source.
    """
    try:
        raw = secrets.token_bytes(nbytes)
    except (OSError, NotImplementedError) as e:
        raise KeyDerivationFailure("Couldn't obtain secure random bytes") from e
    if len(raw) != nbytes:
        raise KeyDerivationFailure(f"Expected {nbytes} random bytes, got {len(raw)}")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def derive_storage_key(ext: str, prefix: Optional[str] = None) -> str:
    """Build `[prefix/]<token>.<ext>`."""
    ext = ext.strip().lstrip(".")
    if not ext:
        raise KeyDerivationFailure("Storage key needs a file extension")
    name = f"{random_token()}.{ext}"
    if prefix:
        return f"{prefix.strip('/')}/{name}"
    return name


def parse_media_type(content_type: Optional[str]) -> str:
    """
    Return the bare `type/subtype` of a Content-Type header value, lowercased.
    Parameters (`; charset=...`) are dropped.
    """
    base = (content_type or "").split(";", 1)[0].strip().lower()
    maintype, sep, subtype = base.partition("/")
    if not sep or not maintype or not subtype:
        raise UnsupportedMediaType(f"Couldn't parse media type: {content_type!r}")
    return base


def extension_for_media_type(media_type: str) -> str:
    """
    Mechanically derive a file extension from the subtype ("image/png" -> "png").
    Structured suffixes are cut ("image/svg+xml" -> "svg").
    """
    subtype = parse_media_type(media_type).split("/", 1)[1]
    ext = subtype.split("+", 1)[0]
    if not ext.replace("-", "").replace(".", "").isalnum():
        raise UnsupportedMediaType(f"Can't derive a file extension from {media_type!r}")
    return ext
