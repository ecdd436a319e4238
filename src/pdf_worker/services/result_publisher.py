"""Delivers signed download URLs for rendered PDFs."""

import asyncio
import logging

from pdf_worker.infrastructure.sqs_client import SQSClient
from pdf_worker.models.schemas import SignedUrlNotification

logger = logging.getLogger(__name__)


class ResultPublisher:
    """Logs each signed URL and, when a result queue is configured, publishes it there."""

    def __init__(self, sqs_client: SQSClient, queue_url: str = ""):
        """
        Initialize the publisher.

        Args:
            sqs_client: SQSClient instance.
            queue_url: Result queue URL; empty disables publishing.
        """
        self._sqs_client = sqs_client
        self._queue_url = queue_url

    @property
    def enabled(self) -> bool:
        return bool(self._queue_url)

    async def publish(self, notification: SignedUrlNotification) -> None:
        """
        Deliver a signed URL notification.

        Raises:
            QueueUnavailable: The result queue rejected the message.
        """
        logger.info(
            "Signed URL for message %s (s3://%s/%s, expires in %ds): %s",
            notification.message_id,
            notification.bucket,
            notification.key,
            notification.expires_in,
            notification.url,
        )

        if not self.enabled:
            return

        await asyncio.to_thread(
            self._sqs_client.send_message,
            self._queue_url,
            notification.model_dump(),
        )
        logger.info(
            "Published signed URL for message %s to %s",
            notification.message_id,
            self._queue_url,
        )
