"""Typed exceptions for the PDF worker.

Each failure mode of the per-message pipeline has its own type so the
batch processor can log it with context and tests can assert on it.
"""


class PdfWorkerError(RuntimeError):
    """Base class for worker failures."""


class ConfigError(PdfWorkerError):
    """Configuration missing/invalid."""


class MalformedMessageBody(PdfWorkerError):
    """Queue message body is not JSON or lacks a usable `content` field."""


class ObjectNotFound(PdfWorkerError):
    """Requested S3 object does not exist."""

    def __init__(self, bucket: str, key: str):
        super().__init__(f"s3://{bucket}/{key} not found")
        self.bucket = bucket
        self.key = key


class AccessDenied(PdfWorkerError):
    """S3 refused the operation for the execution role."""

    def __init__(self, bucket: str, key: str, operation: str):
        super().__init__(f"Access denied for {operation} on s3://{bucket}/{key}")
        self.bucket = bucket
        self.key = key
        self.operation = operation


class StorageUnavailable(PdfWorkerError):
    """S3 failed for a reason other than missing object or permissions."""


class RenderEngineError(PdfWorkerError):
    """Headless browser failed to launch, load content, or produce a PDF."""


class InvalidReceiptHandle(PdfWorkerError):
    """Receipt handle is stale or unknown to the queue."""


class QueueUnavailable(PdfWorkerError):
    """SQS failed for a reason other than a stale receipt handle."""


class BatchProcessingError(PdfWorkerError):
    """One or more messages in a batch failed."""

    def __init__(self, failed_message_ids: list[str]):
        super().__init__(
            f"{len(failed_message_ids)} message(s) failed: {', '.join(failed_message_ids)}"
        )
        self.failed_message_ids = failed_message_ids
