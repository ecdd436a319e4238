"""Render handler: per-message HTML to PDF pipeline and batch fan-out."""

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from pdf_worker.exceptions import MalformedMessageBody, PdfWorkerError
from pdf_worker.infrastructure.pdf_renderer import PdfRenderer
from pdf_worker.models.schemas import (
    BatchResult,
    MessageResult,
    PipelineStage,
    QueueMessage,
    SignedUrlNotification,
)
from pdf_worker.services.document_store import DocumentStore
from pdf_worker.services.message_acknowledger import MessageAcknowledger
from pdf_worker.services.result_publisher import ResultPublisher

logger = logging.getLogger(__name__)


class MessagePipeline:
    """Drives one SQS record through fetch, render, store, sign, deliver and acknowledge.

    Stages run strictly in order. Any error moves the message to FAILED and
    leaves it on the queue for redelivery.
    """

    def __init__(
        self,
        record: dict[str, Any],
        renderer: PdfRenderer,
        document_store: DocumentStore,
        acknowledger: MessageAcknowledger,
        publisher: ResultPublisher,
    ):
        self._record = record
        self._renderer = renderer
        self._document_store = document_store
        self._acknowledger = acknowledger
        self._publisher = publisher

        message_id = record.get("messageId") if isinstance(record, dict) else None
        self.message_id: str = str(message_id or "<unknown>")
        self.stage = PipelineStage.RECEIVED
        self.output_key: str | None = None
        self.signed_url: str | None = None

    def _enter(self, stage: PipelineStage) -> None:
        logger.debug("Message %s: %s -> %s", self.message_id, self.stage.value, stage.value)
        self.stage = stage

    def failed(self, error: str) -> MessageResult:
        """Build the result for a message that did not complete."""
        return MessageResult(
            message_id=self.message_id,
            success=False,
            stage=PipelineStage.FAILED,
            failed_stage=self.stage,
            output_key=self.output_key,
            signed_url=self.signed_url,
            error=error,
        )

    def _parse(self) -> tuple[QueueMessage, str]:
        try:
            message = QueueMessage.model_validate(self._record)
        except ValidationError as e:
            raise MalformedMessageBody(
                f"Record {self.message_id} lacks messageId or receiptHandle"
            ) from e
        return message, message.parse_body().content

    async def run(self) -> MessageResult:
        """Run the pipeline; errors are logged and returned as a failed result."""
        try:
            return await self._run()
        except PdfWorkerError as e:
            logger.error(
                "Message %s failed while %s: %s: %s",
                self.message_id,
                self.stage.value,
                type(e).__name__,
                e,
            )
            return self.failed(f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.exception(
                "Message %s failed unexpectedly while %s: %s",
                self.message_id,
                self.stage.value,
                e,
            )
            return self.failed(f"{type(e).__name__}: {e}")

    async def _run(self) -> MessageResult:
        message, content = self._parse()
        logger.info("Processing message %s (content=%s)", self.message_id, content)

        self._enter(PipelineStage.FETCHING)
        html = await self._document_store.fetch_html(content)

        self._enter(PipelineStage.RENDERING)
        pdf = await self._renderer.render(html)

        self._enter(PipelineStage.STORING)
        self.output_key = await self._document_store.store_pdf(self.message_id, pdf)

        self._enter(PipelineStage.SIGNING)
        self.signed_url = await self._document_store.sign_url(self.output_key)

        self._enter(PipelineStage.DELIVERING)
        await self._publisher.publish(
            SignedUrlNotification(
                message_id=self.message_id,
                content=content,
                bucket=self._document_store.bucket,
                key=self.output_key,
                url=self.signed_url,
                expires_in=self._document_store.url_expiry,
            )
        )

        self._enter(PipelineStage.ACKNOWLEDGING)
        acknowledged = await self._acknowledger.acknowledge(message)

        self._enter(PipelineStage.DONE)
        logger.info("Message %s done: %s", self.message_id, self.output_key)
        return MessageResult(
            message_id=self.message_id,
            success=True,
            stage=PipelineStage.DONE,
            output_key=self.output_key,
            signed_url=self.signed_url,
            acknowledged=acknowledged,
        )


async def process_message(
    record: dict[str, Any],
    renderer: PdfRenderer,
    document_store: DocumentStore,
    acknowledger: MessageAcknowledger,
    publisher: ResultPublisher,
    timeout: float | None = None,
) -> MessageResult:
    """
    Process a single SQS record (render its HTML document to PDF).

    Args:
        record: Raw SQS record from the trigger event.
        renderer: Chromium PDF renderer.
        document_store: S3 input/output access.
        acknowledger: Deletes the record from the trigger queue.
        publisher: Delivers the signed URL.
        timeout: Seconds before the pipeline is cancelled; None waits indefinitely.

    Returns:
        MessageResult with final stage, output key and signed URL.
    """
    pipeline = MessagePipeline(record, renderer, document_store, acknowledger, publisher)

    if timeout is None:
        return await pipeline.run()

    try:
        return await asyncio.wait_for(pipeline.run(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(
            "Message %s timed out after %.1fs while %s",
            pipeline.message_id,
            timeout,
            pipeline.stage.value,
        )
        return pipeline.failed(f"Timed out after {timeout:.1f}s")


async def process_batch(
    records: list[dict[str, Any]],
    renderer: PdfRenderer,
    document_store: DocumentStore,
    acknowledger: MessageAcknowledger,
    publisher: ResultPublisher,
    timeout: float | None = None,
) -> BatchResult:
    """
    Process every record of a trigger batch concurrently.

    One record's failure does not affect the others. Returns only after
    every pipeline has settled.

    Args:
        records: SQS records from the trigger event.
        renderer: Chromium PDF renderer.
        document_store: S3 input/output access.
        acknowledger: Deletes records from the trigger queue.
        publisher: Delivers signed URLs.
        timeout: Per-pipeline deadline in seconds.

    Returns:
        BatchResult with one MessageResult per record, in input order.
    """
    logger.info("Processing batch of %d message(s)", len(records))

    results = await asyncio.gather(
        *(
            process_message(
                record,
                renderer=renderer,
                document_store=document_store,
                acknowledger=acknowledger,
                publisher=publisher,
                timeout=timeout,
            )
            for record in records
        )
    )
    batch = BatchResult(results=list(results))

    logger.info(
        "Batch complete: %d processed, %d failed",
        batch.succeeded,
        batch.failed,
    )
    return batch
