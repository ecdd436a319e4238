"""Pydantic models for SQS records and rendering results."""

import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pdf_worker.exceptions import MalformedMessageBody


class MessageBody(BaseModel):
    """Payload of a render request: `content` names the HTML document under the input prefix."""

    content: str = Field(min_length=1)


class QueueMessage(BaseModel):
    """A single record of the SQS trigger event."""

    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(alias="messageId", min_length=1)
    body: str = ""
    receipt_handle: str = Field(alias="receiptHandle", min_length=1)

    def parse_body(self) -> MessageBody:
        """Validate the JSON body, failing fast on a missing or invalid `content`."""
        try:
            data = json.loads(self.body)
        except json.JSONDecodeError as e:
            raise MalformedMessageBody(f"Message {self.message_id} body is not JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedMessageBody(f"Message {self.message_id} body is not a JSON object")

        try:
            return MessageBody.model_validate(data, strict=True)
        except ValidationError as e:
            raise MalformedMessageBody(
                f"Message {self.message_id} has no valid 'content' field"
            ) from e


class PipelineStage(str, Enum):
    """Per-message pipeline states, in execution order."""

    RECEIVED = "received"
    FETCHING = "fetching"
    RENDERING = "rendering"
    STORING = "storing"
    SIGNING = "signing"
    DELIVERING = "delivering"
    ACKNOWLEDGING = "acknowledging"
    DONE = "done"
    FAILED = "failed"


class MessageResult(BaseModel):
    """Outcome of one message's pipeline."""

    message_id: str
    success: bool
    stage: PipelineStage
    failed_stage: PipelineStage | None = None
    output_key: str | None = None
    signed_url: str | None = None
    acknowledged: bool = False
    error: str | None = None


class BatchResult(BaseModel):
    """Outcome of a whole trigger batch."""

    results: list[MessageResult]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def failed_message_ids(self) -> list[str]:
        return [r.message_id for r in self.results if not r.success]


class SignedUrlNotification(BaseModel):
    """Message published to the result queue once a PDF is signed."""

    message_id: str
    content: str
    bucket: str
    key: str
    url: str
    expires_in: int
