# tubely/services/storage/s3_object_store.py
from __future__ import annotations

from typing import Any, BinaryIO, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from tubely.common.logging import get_logger
from tubely.common.settings import S3Config, get_settings
from tubely.domain.errors import ObjectStoreFailure
from tubely.domain.policies.object_urls import object_url
from tubely.domain.ports.object_store import ObjectStorePort

logger = get_logger()


class S3ObjectStore(ObjectStorePort):
    """
    S3 adapter. Single PutObject per asset; no multipart or resumable logic.
    """

    def __init__(self, cfg: Optional[S3Config] = None, client: Any = None):
        self.cfg = cfg or get_settings().s3
        if client is None:
            session = boto3.session.Session(
                aws_access_key_id=self.cfg.access_key_id,
                aws_secret_access_key=self.cfg.secret_access_key,
                region_name=self.cfg.region,
            )
            client = session.client(
                "s3",
                endpoint_url=self.cfg.endpoint_url,
                config=Config(signature_version="s3v4"),
            )
        self.s3 = client
        self.bucket = self.cfg.bucket

    def put(self, key: str, body: BinaryIO, content_type: str) -> None:
        logger.info("s3 put s3://%s/%s (%s)", self.bucket, key, content_type)
        try:
            self.s3.put_object(Bucket=self.bucket, Key=key, Body=body, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            raise ObjectStoreFailure(f"Couldn't upload {key} to bucket {self.bucket}") from e

    def locator(self, key: str) -> str:
        return object_url(self.bucket, self.cfg.region, key, public_base_url=self.cfg.public_base_url)
