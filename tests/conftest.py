"""Shared fixtures for PDF worker tests."""

import io
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError

from pdf_worker.infrastructure.pdf_renderer import PdfRenderer
from pdf_worker.infrastructure.s3_client import S3Client
from pdf_worker.infrastructure.sqs_client import SQSClient
from pdf_worker.services.document_store import DocumentStore
from pdf_worker.services.message_acknowledger import MessageAcknowledger
from pdf_worker.services.result_publisher import ResultPublisher

BUCKET = "test-pdf-bucket"
QUEUE_URL = "https://sqs.us-east-2.amazonaws.com/123456789012/pdf-processing-queue"
FAKE_PDF = b"%PDF-1.7\n% rendered\n%%EOF"


class InMemoryS3:
    """Minimal stand-in for a boto3 S3 client backed by a dict."""

    def __init__(self):
        self.objects: dict[tuple[str, str], dict] = {}
        self.put_calls: list[str] = []

    def add(self, bucket: str, key: str, body: bytes, content_type: str = "text/html") -> None:
        self.objects[(bucket, key)] = {"Body": body, "ContentType": content_type}

    def get_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
                "GetObject",
            )
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)]["Body"])}

    def put_object(self, Bucket, Key, Body, ContentType):
        self.put_calls.append(Key)
        self.objects[(Bucket, Key)] = {"Body": Body, "ContentType": ContentType}
        return {"ETag": '"etag"'}

    def generate_presigned_url(self, ClientMethod, Params, ExpiresIn):
        return (
            f"https://{Params['Bucket']}.s3.amazonaws.com/{Params['Key']}"
            f"?X-Amz-Expires={ExpiresIn}&X-Amz-Signature=abc"
        )


def make_record(message_id: str, body) -> dict:
    """Build an SQS trigger record; dict bodies are JSON-encoded."""
    return {
        "messageId": message_id,
        "receiptHandle": f"handle-{message_id}",
        "body": json.dumps(body) if isinstance(body, dict) else body,
        "eventSource": "aws:sqs",
    }


@pytest.fixture
def s3():
    store = InMemoryS3()
    store.add(BUCKET, "in/invoice.html", b"<html><body><h1>Invoice</h1></body></html>")
    return store


@pytest.fixture
def sqs_boto_client():
    client = MagicMock()
    client.send_message.return_value = {"MessageId": "result-1"}
    return client


@pytest.fixture
def renderer():
    mock_renderer = MagicMock(spec=PdfRenderer)
    mock_renderer.render = AsyncMock(return_value=FAKE_PDF)
    return mock_renderer


@pytest.fixture
def document_store(s3):
    return DocumentStore(S3Client(s3), bucket=BUCKET)


@pytest.fixture
def acknowledger(sqs_boto_client):
    return MessageAcknowledger(SQSClient(sqs_boto_client), QUEUE_URL)


@pytest.fixture
def publisher(sqs_boto_client):
    return ResultPublisher(SQSClient(sqs_boto_client))
