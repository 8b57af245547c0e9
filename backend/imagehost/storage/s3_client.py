"""
S3-compatible object store client.

Uses boto3 against any S3-compatible API (Cloudflare R2, Sevalla, MinIO,
AWS S3). Objects are keyed by image id; the bucket stays private and
readers only ever get presigned GET URLs.
"""
import logging
import time
from typing import Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from imagehost.config import Settings
from imagehost.errors import StorageError
from imagehost.storage.base import ObjectStore
from imagehost.utils.metrics import storage_operation_duration_seconds, storage_failures_total

logger = logging.getLogger(__name__)

_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class S3ObjectStore(ObjectStore):
    """
    boto3-backed object store.

    The client is created once at startup and shared by all requests;
    boto3 clients are safe to use from multiple threads.
    """

    def __init__(
        self,
        bucket: str,
        access_key_id: str,
        secret_access_key: str,
        endpoint_url: Optional[str] = None,
        region: str = "auto",
    ):
        self._bucket = bucket
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
            ),
        )
        logger.info(f"S3 client initialized for bucket: {bucket}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        return cls(
            bucket=settings.s3_bucket,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            endpoint_url=settings.endpoint,
            region=settings.s3_region,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def put_object(
        self,
        key: str,
        body: bytes,
        content_type: str,
        metadata: Dict[str, str],
    ) -> None:
        start = time.perf_counter()
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
                Metadata=metadata,
            )
        except (ClientError, BotoCoreError) as e:
            storage_failures_total.labels(operation="put").inc()
            raise StorageError("put", key, str(e)) from e
        finally:
            storage_operation_duration_seconds.labels(operation="put").observe(
                time.perf_counter() - start
            )
        logger.debug(f"Stored {key} ({len(body)} bytes, {content_type})")

    def object_exists(self, key: str) -> bool:
        start = time.perf_counter()
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return False
            storage_failures_total.labels(operation="head").inc()
            raise StorageError("head", key, str(e)) from e
        except BotoCoreError as e:
            # Includes ParamValidationError for keys S3 cannot address
            storage_failures_total.labels(operation="head").inc()
            raise StorageError("head", key, str(e)) from e
        finally:
            storage_operation_duration_seconds.labels(operation="head").observe(
                time.perf_counter() - start
            )

    def presigned_get_url(self, key: str, expires_in: int) -> str:
        start = time.perf_counter()
        try:
            url = self._client.generate_presigned_url(
                ClientMethod="get_object",
                Params={
                    "Bucket": self._bucket,
                    "Key": key,
                },
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            storage_failures_total.labels(operation="sign").inc()
            raise StorageError("sign", key, str(e)) from e
        finally:
            storage_operation_duration_seconds.labels(operation="sign").observe(
                time.perf_counter() - start
            )
        logger.debug(f"Generated presigned read URL for {key} (expires in {expires_in}s)")
        return url

    def ping(self) -> None:
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except (ClientError, BotoCoreError) as e:
            storage_failures_total.labels(operation="head_bucket").inc()
            raise StorageError("head_bucket", None, str(e)) from e
