# tubely/domain/policies/object_urls.py
from __future__ import annotations

from typing import Optional

S3_URL_TEMPLATE = "https://{bucket}.s3.{region}.amazonaws.com/{key}"


def object_url(bucket: str, region: str, key: str, *, public_base_url: Optional[str] = None) -> str:
    """
    Deterministic public locator for a stored object. Virtual-hosted S3 style
    unless a public base (CDN, MinIO) is configured.
    """
    key = key.lstrip("/")
    if public_base_url:
        return f"{public_base_url.rstrip('/')}/{key}"
    return S3_URL_TEMPLATE.format(bucket=bucket, region=region, key=key)
