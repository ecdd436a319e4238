"""Acknowledges processed messages by deleting them from the trigger queue."""

import asyncio
import logging

from pdf_worker.exceptions import InvalidReceiptHandle
from pdf_worker.infrastructure.sqs_client import SQSClient
from pdf_worker.models.schemas import QueueMessage

logger = logging.getLogger(__name__)


class MessageAcknowledger:
    """Deletes messages whose pipeline completed."""

    def __init__(self, sqs_client: SQSClient, queue_url: str):
        """
        Initialize the acknowledger.

        Args:
            sqs_client: SQSClient instance.
            queue_url: URL of the queue that triggers the worker.
        """
        self._sqs_client = sqs_client
        self._queue_url = queue_url

    @property
    def queue_url(self) -> str:
        """Get the trigger queue URL."""
        return self._queue_url

    async def acknowledge(self, message: QueueMessage) -> bool:
        """
        Delete a message from the trigger queue.

        A stale receipt handle is logged and reported as False: the PDF is
        already stored, so the message is not failed over it.

        Returns:
            True if the message was deleted, False if its handle was stale.

        Raises:
            QueueUnavailable: SQS failed for another reason.
        """
        try:
            await asyncio.to_thread(
                self._sqs_client.delete_message,
                self._queue_url,
                message.receipt_handle,
            )
        except InvalidReceiptHandle as e:
            logger.warning(
                "Message %s could not be deleted, receipt handle is stale: %s",
                message.message_id,
                e,
            )
            return False

        logger.info("Deleted message %s from queue", message.message_id)
        return True
