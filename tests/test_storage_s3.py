import io

import boto3
import pytest
from botocore.response import StreamingBody
from botocore.stub import Stubber

from core.exceptions import ConfigurationError, ObjectNotFoundError, ObjectReadError, StorageError
from core.storage.s3 import S3Storage


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        endpoint_url="http://localhost:9000",
        aws_access_key_id="minioadmin",
        aws_secret_access_key="minioadmin",
    )


class _RecordingClient:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def put_object(self, **kwargs):
        self.calls.append(("put_object", kwargs))
        return {}


class _BrokenBody:
    closed = False

    def read(self) -> bytes:
        raise OSError("connection reset")

    def close(self) -> None:
        self.closed = True


def test_put_bytes_passes_bucket_key_and_body() -> None:
    client = _RecordingClient()
    uri = S3Storage(client=client).put_bytes("bucket1", "xmlobject/1", b"<a>1</a>")

    assert uri == "s3://bucket1/xmlobject/1"
    assert client.calls == [
        ("put_object", {"Bucket": "bucket1", "Key": "xmlobject/1", "Body": b"<a>1</a>", "ContentLength": 8}),
    ]


def test_put_bytes_through_stubbed_client(s3_client) -> None:
    with Stubber(s3_client) as stubber:
        stubber.add_response("put_object", {"ETag": '"abc"'})
        assert S3Storage(client=s3_client).put_bytes("bucket1", "xmlobject/1", b"<a/>") == "s3://bucket1/xmlobject/1"
        stubber.assert_no_pending_responses()


def test_put_bytes_failure_raises_storage_error(s3_client) -> None:
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(StorageError):
            S3Storage(client=s3_client).put_bytes("bucket1", "xmlobject/1", b"<a/>")


def test_get_bytes_reads_body(s3_client) -> None:
    data = b"<a>stored</a>"
    with Stubber(s3_client) as stubber:
        stubber.add_response("get_object", {"Body": StreamingBody(io.BytesIO(data), len(data))})
        assert S3Storage(client=s3_client).get_bytes("bucket1", "xmlobject/7") == data


def test_missing_key_raises_not_found(s3_client) -> None:
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("get_object", service_error_code="NoSuchKey", http_status_code=404)
        with pytest.raises(ObjectNotFoundError) as info:
            S3Storage(client=s3_client).get_bytes("bucket1", "does-not-exist")

    assert info.value.details["code"] == "NoSuchKey"


def test_other_get_failures_are_plain_storage_errors(s3_client) -> None:
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("get_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(StorageError) as info:
            S3Storage(client=s3_client).get_bytes("bucket1", "xmlobject/1")

    assert not isinstance(info.value, ObjectNotFoundError)


def test_body_read_failure_raises_object_read_error() -> None:
    body = _BrokenBody()

    class _Client:
        def get_object(self, **kwargs):
            return {"Body": body}

    with pytest.raises(ObjectReadError):
        S3Storage(client=_Client()).get_bytes("bucket1", "xmlobject/1")
    assert body.closed


def test_invalid_endpoint_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        S3Storage(endpoint_url="not a url", access_key="a", secret_key="b", region="us-east-1")
