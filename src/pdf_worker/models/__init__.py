"""Models package for the PDF worker."""

from pdf_worker.models.schemas import (
    BatchResult,
    MessageBody,
    MessageResult,
    PipelineStage,
    QueueMessage,
    SignedUrlNotification,
)

__all__ = [
    "BatchResult",
    "MessageBody",
    "MessageResult",
    "PipelineStage",
    "QueueMessage",
    "SignedUrlNotification",
]
