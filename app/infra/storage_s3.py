# app/infra/storage_s3.py
from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.config import Settings

logger = logging.getLogger(__name__)


class S3StorageError(RuntimeError):
    pass


def build_s3_client(settings: Settings) -> Any:
    endpoint = (settings.S3_ENDPOINT_URL or "").strip().rstrip("/") or None

    try:
        return boto3.client(
            "s3",
            endpoint_url=endpoint,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=settings.AWS_REGION,
            config=Config(signature_version="s3v4"),
        )
    except Exception as e:
        raise S3StorageError(f"Fallo creando client S3: {e}") from e


class S3Storage:
    """
    Adaptador mínimo sobre el client S3 de boto3.

    El bucket se recibe en cada llamada porque se resuelve por request
    (tabla Configs); solo se valida que no venga vacío.
    """

    def __init__(self, client: Any):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3Storage":
        return cls(build_s3_client(settings))

    @staticmethod
    def _require_bucket(bucket: Optional[str]) -> str:
        if not bucket:
            raise S3StorageError("No se pudo obtener el nombre del bucket desde la URL")
        return bucket

    def upload_bytes(
        self,
        *,
        bucket: Optional[str],
        key: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        bucket = self._require_bucket(bucket)
        params = {"Bucket": bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type

        logger.debug("s3 put_object bucket=%s key=%s bytes=%d", bucket, key, len(data))
        try:
            self.client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise S3StorageError(f"Error upload S3: {e}") from e
        return key

    def delete_object(self, *, bucket: Optional[str], key: str) -> None:
        bucket = self._require_bucket(bucket)

        logger.debug("s3 delete_object bucket=%s key=%s", bucket, key)
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise S3StorageError(f"Error delete S3: {e}") from e

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if close is not None:
            close()
