from __future__ import annotations

import logging
from typing import BinaryIO

try:
    import boto3
    from botocore.exceptions import ClientError
except ImportError:  # pragma: no cover
    boto3 = None  # type: ignore[assignment]
    ClientError = None  # type: ignore[assignment,misc]

from uploaded_files.storage.base import StorageBackend

logger = logging.getLogger(__name__)

_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class S3Storage(StorageBackend):
    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        endpoint_url: str = "",
    ) -> None:
        self.bucket = bucket

        client_kwargs: dict = {
            "service_name": "s3",
            "region_name": region,
            "aws_access_key_id": access_key_id,
            "aws_secret_access_key": secret_access_key,
        }
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url

        if boto3 is None:
            raise ImportError(
                "boto3 is required for S3 storage. "
                "Install it with: pip install uploaded-files[s3]"
            )
        self.client = boto3.client(**client_kwargs)

    def write_stream(self, key: str, stream: BinaryIO, content_type: str | None = None) -> None:
        extra_args = {"ContentType": content_type} if content_type else None
        self.client.upload_fileobj(stream, self.bucket, key, ExtraArgs=extra_args)
        logger.info("Uploaded %s to s3://%s/%s", key, self.bucket, key)

    def get(self, key: str) -> bytes:
        logger.debug("Fetching s3://%s/%s", self.bucket, key)
        response = self.client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"].read()

    def delete(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)
        logger.info("Deleted s3://%s/%s", self.bucket, key)

    def file_exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return False
            raise
        return True
