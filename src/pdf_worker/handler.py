"""AWS Lambda handler for HTML to PDF rendering.

Triggered by SQS. Each record names an HTML document under `in/` in the
worker bucket; the handler renders it with headless Chromium, stores the
PDF under `out/{messageId}.pdf`, signs a 7-day download URL and deletes
the record from the queue.
"""

import asyncio
import json
import logging

from pdf_worker.exceptions import BatchProcessingError
from pdf_worker.handlers.render import process_batch
from pdf_worker.infrastructure.dependency_injection import DependenciesContainer

# Configure root logger for Lambda (all modules will inherit this)
logging.getLogger().setLevel(logging.INFO)
logger = logging.getLogger(__name__)

# Built once per Lambda container; clients are shared across invocations
container = DependenciesContainer()


def _pipeline_timeout(context, margin_ms: int) -> float | None:
    """Seconds each pipeline may run before the Lambda deadline, minus a teardown margin."""
    if context is None or not hasattr(context, "get_remaining_time_in_millis"):
        return None
    remaining_ms = context.get_remaining_time_in_millis() - margin_ms
    return max(remaining_ms, 0) / 1000


def _run_batch(coro):
    """Run the batch on a fresh event loop.

    Unlike asyncio.run, closing the loop does not join default-executor
    threads, so a boto3 call abandoned by a pipeline deadline cannot hold
    the invocation open. Botocore timeouts end such calls in the background.
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            loop.close()


def lambda_handler(event: dict, context) -> dict:
    """
    Lambda handler function triggered by SQS.

    Args:
        event: SQS event with a batch of records.
        context: Lambda context object.

    Returns:
        Response dict with statusCode and body, or a partial batch
        response when REPORT_BATCH_ITEM_FAILURES is enabled.

    Raises:
        BatchProcessingError: One or more records failed (the batch is
            left for redelivery; successful records were already deleted).
    """
    records = event.get("Records", [])
    logger.info("Received SQS event with %d record(s)", len(records))

    try:
        config = container.config()
        config.validate()

        result = _run_batch(
            process_batch(
                records,
                renderer=container.pdf_renderer(),
                document_store=container.document_store(),
                acknowledger=container.message_acknowledger(),
                publisher=container.result_publisher(),
                timeout=_pipeline_timeout(context, config.timeout_margin_ms),
            )
        )
    except Exception as e:
        logger.exception("Failed to process SQS batch: %s", e)
        raise

    if config.report_batch_item_failures:
        failures = [{"itemIdentifier": message_id} for message_id in result.failed_message_ids]
        logger.info("Reporting %d batch item failure(s)", len(failures))
        return {"batchItemFailures": failures}

    if result.failed:
        logger.error("Batch failed for message(s): %s", result.failed_message_ids)
        raise BatchProcessingError(result.failed_message_ids)

    response_body = {
        "message": "PDF rendering completed",
        "total": result.total,
        "processed": result.succeeded,
        "failed": result.failed,
        "outputs": [r.output_key for r in result.results],
    }
    logger.info("Rendering completed: %s", response_body)

    return {
        "statusCode": 200,
        "body": json.dumps(response_body),
    }
