"""Infrastructure package for the PDF worker."""

from pdf_worker.infrastructure.pdf_renderer import PdfRenderer
from pdf_worker.infrastructure.s3_client import S3Client
from pdf_worker.infrastructure.sqs_client import SQSClient

__all__ = [
    "PdfRenderer",
    "S3Client",
    "SQSClient",
]
