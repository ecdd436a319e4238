"""Configuration management for the PDF worker."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from pdf_worker.exceptions import ConfigError

# Load .env if exists (local dev only, no-op in Lambda)
load_dotenv()

# SigV4 presigned URLs cannot outlive 7 days
MAX_SIGNED_URL_EXPIRY = 60 * 60 * 24 * 7

# Wall-clock limit of the Lambda function
LAMBDA_TIMEOUT_SECONDS = 30


def _load_json_config(filename: str) -> dict:
    """Load configuration from JSON file in .config directory."""
    config_path = Path(__file__).parent.parent.parent / ".config" / filename
    if config_path.exists():
        with open(config_path, "r") as f:
            return json.load(f)
    return {}


_config_dev = _load_json_config("config.dev.json")
_config_secrets = _load_json_config("config.secrets.dev.json")


def _get_config(key: str, default: str = "") -> str:
    """Get config value with priority: env var > json config > default."""
    env_value = os.getenv(key.upper())
    if env_value:  # Treat empty string as missing
        return env_value

    if key.lower() in _config_secrets:
        return str(_config_secrets[key.lower()])

    if key.lower() in _config_dev:
        return str(_config_dev[key.lower()])

    return default


def _get_bool(key: str, default: str) -> bool:
    return _get_config(key, default).strip().lower() in ("1", "true", "yes", "on")


def _setting(key: str, default: str = ""):
    return field(default_factory=lambda: _get_config(key, default))


@dataclass
class Config:
    """Worker configuration loaded from env vars or JSON files."""

    # AWS
    aws_region: str = _setting("AWS_REGION", "us-east-2")

    # S3 layout
    pdf_bucket: str = _setting("PDF_BUCKET", "catalog-arrow")
    input_prefix: str = _setting("INPUT_PREFIX", "in/")
    output_prefix: str = _setting("OUTPUT_PREFIX", "out/")
    signed_url_expiry: int = field(
        default_factory=lambda: int(_get_config("SIGNED_URL_EXPIRY", str(MAX_SIGNED_URL_EXPIRY)))
    )

    # SQS
    sqs_queue_url: str = _setting("SQS_QUEUE_URL", "")
    result_queue_url: str = _setting("RESULT_QUEUE_URL", "")
    report_batch_item_failures: bool = field(
        default_factory=lambda: _get_bool("REPORT_BATCH_ITEM_FAILURES", "false")
    )

    # Chromium
    chromium_executable_path: str = _setting("CHROMIUM_EXECUTABLE_PATH", "")
    headless: bool = field(default_factory=lambda: _get_bool("HEADLESS", "true"))
    render_timeout_ms: int = field(
        default_factory=lambda: int(_get_config("RENDER_TIMEOUT_MS", "20000"))
    )

    # Botocore limits; a stalled call gives up after (connect + read) * attempts
    aws_connect_timeout: float = field(
        default_factory=lambda: float(_get_config("AWS_CONNECT_TIMEOUT", "2"))
    )
    aws_read_timeout: float = field(
        default_factory=lambda: float(_get_config("AWS_READ_TIMEOUT", "5"))
    )
    aws_max_attempts: int = field(
        default_factory=lambda: int(_get_config("AWS_MAX_ATTEMPTS", "2"))
    )

    # Time kept back from the Lambda deadline for browser teardown
    timeout_margin_ms: int = field(
        default_factory=lambda: int(_get_config("TIMEOUT_MARGIN_MS", "2000"))
    )

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.pdf_bucket:
            raise ConfigError("PDF_BUCKET environment variable is required")

        if not self.sqs_queue_url:
            raise ConfigError("SQS_QUEUE_URL environment variable is required")

        if not 0 < self.signed_url_expiry <= MAX_SIGNED_URL_EXPIRY:
            raise ConfigError(
                f"SIGNED_URL_EXPIRY must be between 1 and {MAX_SIGNED_URL_EXPIRY} seconds"
            )

        if self.aws_max_call_seconds >= LAMBDA_TIMEOUT_SECONDS:
            raise ConfigError(
                "AWS_CONNECT_TIMEOUT + AWS_READ_TIMEOUT times AWS_MAX_ATTEMPTS must stay "
                f"under the {LAMBDA_TIMEOUT_SECONDS}s Lambda timeout"
            )

    @property
    def aws_max_call_seconds(self) -> float:
        """Longest a single S3 or SQS call can block, retries included."""
        return (self.aws_connect_timeout + self.aws_read_timeout) * self.aws_max_attempts


config = Config()
