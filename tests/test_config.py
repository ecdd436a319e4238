"""Tests for configuration loading."""

from unittest.mock import patch

import pytest

from pdf_worker.config import LAMBDA_TIMEOUT_SECONDS, MAX_SIGNED_URL_EXPIRY, Config
from pdf_worker.exceptions import ConfigError


class TestConfig:
    """Tests for Config."""

    @patch.dict(
        "os.environ",
        {
            "PDF_BUCKET": "env-bucket",
            "SQS_QUEUE_URL": "https://sqs.test/queue",
            "SIGNED_URL_EXPIRY": "3600",
            "REPORT_BATCH_ITEM_FAILURES": "true",
            "HEADLESS": "false",
        },
    )
    def test_reads_environment(self):
        """Test fields are read from environment variables."""
        config = Config()

        assert config.pdf_bucket == "env-bucket"
        assert config.sqs_queue_url == "https://sqs.test/queue"
        assert config.signed_url_expiry == 3600
        assert config.report_batch_item_failures is True
        assert config.headless is False

    @patch.dict("os.environ", {"INPUT_PREFIX": "", "OUTPUT_PREFIX": ""})
    def test_defaults(self):
        """Test empty env vars fall back to defaults."""
        config = Config()

        assert config.input_prefix == "in/"
        assert config.output_prefix == "out/"

    def test_default_expiry_is_seven_days(self):
        """Test the signed URL lifetime defaults to 604800 seconds."""
        assert MAX_SIGNED_URL_EXPIRY == 604800
        assert Config(signed_url_expiry=MAX_SIGNED_URL_EXPIRY).signed_url_expiry == 604800

    def test_validate_passes(self):
        """Test validate accepts a complete configuration."""
        Config(pdf_bucket="b", sqs_queue_url="https://sqs.test/queue").validate()

    def test_validate_requires_queue_url(self):
        """Test validate fails without SQS_QUEUE_URL."""
        with pytest.raises(ConfigError, match="SQS_QUEUE_URL"):
            Config(pdf_bucket="b", sqs_queue_url="").validate()

    def test_validate_requires_bucket(self):
        """Test validate fails without PDF_BUCKET."""
        with pytest.raises(ConfigError, match="PDF_BUCKET"):
            Config(pdf_bucket="", sqs_queue_url="https://sqs.test/queue").validate()

    @pytest.mark.parametrize("expiry", [0, MAX_SIGNED_URL_EXPIRY + 1])
    def test_validate_rejects_expiry_out_of_range(self, expiry):
        """Test validate rejects lifetimes SigV4 cannot sign."""
        config = Config(
            pdf_bucket="b",
            sqs_queue_url="https://sqs.test/queue",
            signed_url_expiry=expiry,
        )

        with pytest.raises(ConfigError, match="SIGNED_URL_EXPIRY"):
            config.validate()

    def test_default_aws_call_budget(self):
        """Test a stalled S3/SQS call gives up well inside the Lambda timeout by default."""
        config = Config(aws_connect_timeout=2, aws_read_timeout=5, aws_max_attempts=2)

        assert config.aws_max_call_seconds == 14
        assert config.aws_max_call_seconds < LAMBDA_TIMEOUT_SECONDS

    @patch.dict(
        "os.environ",
        {"AWS_CONNECT_TIMEOUT": "1.5", "AWS_READ_TIMEOUT": "4", "AWS_MAX_ATTEMPTS": "3"},
    )
    def test_reads_aws_timeouts(self):
        """Test botocore limits are read from environment variables."""
        config = Config()

        assert config.aws_connect_timeout == 1.5
        assert config.aws_read_timeout == 4.0
        assert config.aws_max_attempts == 3

    def test_validate_rejects_call_budget_over_lambda_timeout(self):
        """Test validate fails when retries could outlast the Lambda timeout."""
        config = Config(
            pdf_bucket="b",
            sqs_queue_url="https://sqs.test/queue",
            aws_connect_timeout=10,
            aws_read_timeout=60,
            aws_max_attempts=3,
        )

        with pytest.raises(ConfigError, match="AWS_MAX_ATTEMPTS"):
            config.validate()
