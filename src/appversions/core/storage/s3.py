"""S3-backed object store using boto3."""

import logging
from pathlib import Path

import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from appversions.core.storage.abc import AccessDeniedError, ObjectStore, RemoteObject

logger = logging.getLogger(__name__)

_ACCESS_DENIED_CODES = {"AccessDenied", "InvalidAccessKeyId", "SignatureDoesNotMatch", "403"}


class S3ObjectStore(ObjectStore):
    """Snapshot storage in a single S3 bucket.

    Explicit credentials take precedence; without them boto3's default
    credential chain applies.
    """

    def __init__(
        self,
        bucket_name: str,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
    ) -> None:
        self._bucket_name = bucket_name
        self._credentials_supplied = access_key_id is not None and secret_access_key is not None
        if self._credentials_supplied:
            self._client = boto3.client(
                "s3",
                region_name=region,
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
            )
        else:
            self._client = boto3.client("s3", region_name=region)

    def _access_denied(self, operation: str, error: Exception) -> AccessDeniedError:
        return AccessDeniedError(
            f"Access denied during {operation} on bucket {self._bucket_name}: {error}",
            credentials_supplied=self._credentials_supplied,
        )

    def _is_access_denied(self, error: ClientError) -> bool:
        code = error.response.get("Error", {}).get("Code", "")
        return code in _ACCESS_DENIED_CODES

    def upload(self, local_path: Path, remote_key: str) -> None:
        logger.debug("Uploading %s to s3://%s/%s", local_path, self._bucket_name, remote_key)
        try:
            self._client.upload_file(str(local_path), self._bucket_name, remote_key)
        except NoCredentialsError as e:
            raise self._access_denied("upload", e) from e
        except ClientError as e:
            if self._is_access_denied(e):
                raise self._access_denied("upload", e) from e
            raise

    def list(self, key_prefix: str) -> list[RemoteObject]:
        objects: list[RemoteObject] = []
        paginator = self._client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=self._bucket_name, Prefix=key_prefix):
                for item in page.get("Contents", []):
                    objects.append(RemoteObject(key=item["Key"], last_modified=item["LastModified"]))
        except NoCredentialsError as e:
            raise self._access_denied("list", e) from e
        except ClientError as e:
            if self._is_access_denied(e):
                raise self._access_denied("list", e) from e
            raise
        return objects

    def download(self, remote_key: str, local_path: Path) -> None:
        logger.debug("Downloading s3://%s/%s to %s", self._bucket_name, remote_key, local_path)
        try:
            self._client.download_file(self._bucket_name, remote_key, str(local_path))
        except NoCredentialsError as e:
            raise self._access_denied("download", e) from e
        except ClientError as e:
            if self._is_access_denied(e):
                raise self._access_denied("download", e) from e
            raise
