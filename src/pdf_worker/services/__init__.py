"""Services package for the PDF worker."""

from pdf_worker.services.document_store import DocumentStore
from pdf_worker.services.message_acknowledger import MessageAcknowledger
from pdf_worker.services.result_publisher import ResultPublisher

__all__ = [
    "DocumentStore",
    "MessageAcknowledger",
    "ResultPublisher",
]
