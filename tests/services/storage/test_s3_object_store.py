from __future__ import annotations

import io

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from botocore.stub import Stubber

from tubely.common.settings import S3Config
from tubely.domain.errors import ObjectStoreFailure
from tubely.services.storage.s3_object_store import S3ObjectStore


@pytest.fixture()
def s3_client():
    return boto3.client(
        "s3",
        region_name="eu-central-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


class _RecordingClient:
    def __init__(self, exc: Exception | None = None):
        self.calls: list[dict] = []
        self.exc = exc

    def put_object(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc:
            raise self.exc
        return {"ETag": '"abc"'}


def test_put_object_request_shape():
    client = _RecordingClient()
    store = S3ObjectStore(S3Config(bucket="tubely-media", region="eu-central-1"), client=client)
    body = io.BytesIO(b"data")

    store.put("landscape/k.mp4", body, "video/mp4")

    assert client.calls == [
        {"Bucket": "tubely-media", "Key": "landscape/k.mp4", "Body": body, "ContentType": "video/mp4"}
    ]


def test_put_through_real_client(s3_client):
    store = S3ObjectStore(S3Config(bucket="tubely-media"), client=s3_client)
    with Stubber(s3_client) as stub:
        stub.add_response("put_object", {"ETag": '"abc"'})
        store.put("k.png", io.BytesIO(b"x"), "image/png")
        stub.assert_no_pending_responses()


def test_client_error_becomes_object_store_failure(s3_client):
    store = S3ObjectStore(S3Config(bucket="tubely-media"), client=s3_client)
    with Stubber(s3_client) as stub:
        stub.add_client_error("put_object", service_error_code="NoSuchBucket", http_status_code=404)
        with pytest.raises(ObjectStoreFailure) as ei:
            store.put("k.png", io.BytesIO(b"x"), "image/png")
    assert isinstance(ei.value.__cause__, ClientError)


def test_transport_error_becomes_object_store_failure():
    client = _RecordingClient(exc=EndpointConnectionError(endpoint_url="https://s3.example"))
    store = S3ObjectStore(S3Config(bucket="b"), client=client)
    with pytest.raises(ObjectStoreFailure):
        store.put("k.mp4", io.BytesIO(b"x"), "video/mp4")


def test_locator_matches_bucket_region_key():
    store = S3ObjectStore(S3Config(bucket="tubely-media", region="eu-central-1"), client=_RecordingClient())
    assert store.locator("portrait/k.mp4") == "https://tubely-media.s3.eu-central-1.amazonaws.com/portrait/k.mp4"


def test_locator_uses_public_base():
    cfg = S3Config(bucket="b", region="r", public_base_url="http://localhost:9000/b")
    assert S3ObjectStore(cfg, client=_RecordingClient()).locator("k.png") == "http://localhost:9000/b/k.png"
