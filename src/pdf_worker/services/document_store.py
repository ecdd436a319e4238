"""Document store service: S3 key layout and async access for the render pipeline."""

import asyncio
import logging

from pdf_worker.infrastructure.s3_client import S3Client

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class DocumentStore:
    """Reads HTML inputs and writes PDF outputs in the worker bucket.

    boto3 calls block, so each one runs in a worker thread; the shared
    boto3 client is safe to use from several threads at once.
    """

    def __init__(
        self,
        s3_client: S3Client,
        bucket: str,
        input_prefix: str = "in/",
        output_prefix: str = "out/",
        url_expiry: int = 604800,
    ):
        self._s3_client = s3_client
        self._bucket = bucket
        self._input_prefix = input_prefix
        self._output_prefix = output_prefix
        self._url_expiry = url_expiry

    @property
    def bucket(self) -> str:
        """Get the worker bucket name."""
        return self._bucket

    @property
    def url_expiry(self) -> int:
        """Get the signed URL lifetime in seconds."""
        return self._url_expiry

    def input_key(self, content: str) -> str:
        return f"{self._input_prefix}{content}.html"

    def output_key(self, message_id: str) -> str:
        return f"{self._output_prefix}{message_id}.pdf"

    async def fetch_html(self, content: str) -> str:
        """Fetch `in/{content}.html` and decode it as UTF-8."""
        key = self.input_key(content)
        data = await asyncio.to_thread(self._s3_client.get_object_bytes, self._bucket, key)
        return data.decode("utf-8", errors="replace")

    async def store_pdf(self, message_id: str, pdf: bytes) -> str:
        """
        Write the PDF to `out/{message_id}.pdf`.

        A redelivered message overwrites its earlier output.

        Returns:
            The output key.
        """
        key = self.output_key(message_id)
        await asyncio.to_thread(
            self._s3_client.put_object_bytes,
            self._bucket,
            key,
            pdf,
            PDF_CONTENT_TYPE,
        )
        return key

    async def sign_url(self, key: str) -> str:
        """Create a presigned download URL for an output key."""
        return await asyncio.to_thread(
            self._s3_client.generate_presigned_url,
            self._bucket,
            key,
            self._url_expiry,
        )
