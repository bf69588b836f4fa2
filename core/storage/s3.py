from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import ConfigurationError, ObjectNotFoundError, ObjectReadError, StorageError

_NOT_FOUND_CODES = frozenset(("NoSuchKey", "NoSuchBucket", "404", "NotFound"))


class S3Storage:
    """S3-compatible backend (AWS S3 or MinIO via ``endpoint_url``)."""

    def __init__(
        self,
        *,
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        region: Optional[str] = None,
        client: Any = None,
    ) -> None:
        if client is None:
            session = boto3.session.Session(region_name=region) if region else boto3.session.Session()
            try:
                client = session.client(
                    "s3",
                    endpoint_url=endpoint_url,
                    aws_access_key_id=access_key,
                    aws_secret_access_key=secret_key,
                    # MinIO serves buckets by path, not by virtual host
                    config=Config(s3={"addressing_style": "path"}),
                )
            except (BotoCoreError, ValueError) as exc:
                raise ConfigurationError(
                    "Failed to initialise object storage client",
                    details={"endpoint_url": endpoint_url or "", "reason": str(exc)},
                ) from exc
        self.client = client

    def put_bytes(self, bucket: str, key: str, data: bytes) -> str:
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=data, ContentLength=len(data))
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(
                f"Failed to put s3://{bucket}/{key}",
                details={"bucket": bucket, "key": key, "reason": str(exc)},
            ) from exc
        return f"s3://{bucket}/{key}"

    def get_bytes(self, bucket: str, key: str) -> bytes:
        details = {"bucket": bucket, "key": key}
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(f"No such object: s3://{bucket}/{key}", details={**details, "code": code}) from exc
            raise StorageError(f"Failed to get s3://{bucket}/{key}", details={**details, "code": code}) from exc
        except BotoCoreError as exc:
            raise StorageError(f"Failed to get s3://{bucket}/{key}", details={**details, "reason": str(exc)}) from exc

        body = response["Body"]
        try:
            return body.read()
        except (BotoCoreError, OSError) as exc:
            raise ObjectReadError(f"Failed to read s3://{bucket}/{key}", details={**details, "reason": str(exc)}) from exc
        finally:
            body.close()


__all__ = ["S3Storage"]
