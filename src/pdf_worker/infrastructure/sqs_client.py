"""SQS client wrapper for AWS operations."""

import json
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from pdf_worker.exceptions import InvalidReceiptHandle, QueueUnavailable

logger = logging.getLogger(__name__)

_STALE_HANDLE_CODES = {
    "ReceiptHandleIsInvalid",
    "InvalidParameterValue",
    "AWS.SimpleQueueService.ReceiptHandleIsInvalid",
}


class SQSClient:
    """Handles SQS operations."""

    def __init__(self, client: Any):
        """
        Initialize SQS client wrapper.

        Args:
            client: boto3 SQS client instance.
        """
        self._client = client

    def delete_message(self, queue_url: str, receipt_handle: str) -> None:
        """
        Delete a message from SQS queue.

        Args:
            queue_url: SQS queue URL.
            receipt_handle: Message receipt handle.

        Raises:
            InvalidReceiptHandle: The handle is stale or unknown.
            QueueUnavailable: Any other SQS failure.
        """
        try:
            self._client.delete_message(
                QueueUrl=queue_url,
                ReceiptHandle=receipt_handle,
            )
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _STALE_HANDLE_CODES:
                raise InvalidReceiptHandle(f"Receipt handle rejected by {queue_url}: {e}") from e
            logger.error("Failed to delete message from %s: %s", queue_url, e)
            raise QueueUnavailable(f"DeleteMessage failed on {queue_url}: {e}") from e
        except BotoCoreError as e:
            logger.error("Failed to delete message from %s: %s", queue_url, e)
            raise QueueUnavailable(f"DeleteMessage failed on {queue_url}: {e}") from e

        logger.info("Deleted message from %s", queue_url)

    def send_message(self, queue_url: str, message_body: dict) -> str:
        """
        Send a message to SQS queue.

        Args:
            queue_url: SQS queue URL.
            message_body: Message payload as dict.

        Returns:
            SQS message id of the sent message.
        """
        try:
            response = self._client.send_message(
                QueueUrl=queue_url, MessageBody=json.dumps(message_body)
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to send message to %s: %s", queue_url, e)
            raise QueueUnavailable(f"SendMessage failed on {queue_url}: {e}") from e

        logger.info("Sent message to %s: %s", queue_url, response["MessageId"])
        return response["MessageId"]
