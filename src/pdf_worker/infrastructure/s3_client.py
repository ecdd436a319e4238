"""S3 client wrapper for AWS operations."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from pdf_worker.exceptions import AccessDenied, ObjectNotFound, StorageUnavailable

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "NotFound", "404"}
_ACCESS_DENIED_CODES = {"AccessDenied", "AllAccessDisabled", "403"}


def _translate_error(error: ClientError, bucket: str, key: str, operation: str) -> Exception:
    """Map a botocore ClientError onto the worker's storage exceptions."""
    code = error.response.get("Error", {}).get("Code", "")
    if code in _NOT_FOUND_CODES:
        return ObjectNotFound(bucket, key)
    if code in _ACCESS_DENIED_CODES:
        return AccessDenied(bucket, key, operation)
    return StorageUnavailable(f"{operation} failed for s3://{bucket}/{key}: {error}")


class S3Client:
    """Handles S3 operations."""

    def __init__(self, client: Any):
        """
        Initialize S3 client wrapper.

        Args:
            client: boto3 S3 client instance (SigV4 signing for presigned URLs).
        """
        self._client = client

    def get_object_bytes(self, bucket: str, key: str) -> bytes:
        """
        Get object content as bytes.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.

        Returns:
            Object content as bytes.

        Raises:
            ObjectNotFound: The key does not exist.
            AccessDenied: The execution role may not read the key.
            StorageUnavailable: Any other S3 failure.
        """
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            content = response["Body"].read()
        except ClientError as e:
            logger.error("Failed to get object s3://%s/%s: %s", bucket, key, e)
            raise _translate_error(e, bucket, key, "GetObject") from e
        except BotoCoreError as e:
            logger.error("Failed to get object s3://%s/%s: %s", bucket, key, e)
            raise StorageUnavailable(f"GetObject failed for s3://{bucket}/{key}: {e}") from e

        logger.info("Read %d bytes from s3://%s/%s", len(content), bucket, key)
        return content

    def put_object_bytes(self, bucket: str, key: str, body: bytes, content_type: str) -> None:
        """
        Upload bytes to S3, replacing any existing object at the key.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.
            body: Object content.
            content_type: MIME type stored with the object.

        Raises:
            AccessDenied: The execution role may not write the key.
            StorageUnavailable: Any other S3 failure.
        """
        try:
            self._client.put_object(
                Bucket=bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except ClientError as e:
            logger.error("Failed to upload to s3://%s/%s: %s", bucket, key, e)
            raise _translate_error(e, bucket, key, "PutObject") from e
        except BotoCoreError as e:
            logger.error("Failed to upload to s3://%s/%s: %s", bucket, key, e)
            raise StorageUnavailable(f"PutObject failed for s3://{bucket}/{key}: {e}") from e

        logger.info("Uploaded %d bytes to s3://%s/%s (%s)", len(body), bucket, key, content_type)

    def generate_presigned_url(self, bucket: str, key: str, expires_in: int) -> str:
        """
        Create a time-limited GET URL for an object.

        The object is not checked for existence before signing.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.
            expires_in: URL lifetime in seconds.

        Returns:
            Presigned URL string.
        """
        try:
            url = self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to sign URL for s3://%s/%s: %s", bucket, key, e)
            raise StorageUnavailable(f"Signing failed for s3://{bucket}/{key}: {e}") from e

        logger.info("Signed URL for s3://%s/%s valid for %d seconds", bucket, key, expires_in)
        return url
