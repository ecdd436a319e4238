"""Dependency injection container for the application."""

import os

import boto3
from botocore.config import Config as BotoConfig
from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer

from pdf_worker.config import Config
from pdf_worker.infrastructure.pdf_renderer import PdfRenderer
from pdf_worker.infrastructure.s3_client import S3Client
from pdf_worker.infrastructure.sqs_client import SQSClient
from pdf_worker.services.document_store import DocumentStore
from pdf_worker.services.message_acknowledger import MessageAcknowledger
from pdf_worker.services.result_publisher import ResultPublisher


def _create_session(region: str) -> boto3.Session:
    """Create boto3 session.

    In Lambda: Uses execution role automatically.
    Locally: Uses AWS_PROFILE_PDF_WORKER from environment.
    """
    if os.getenv("AWS_LAMBDA_FUNCTION_NAME"):
        return boto3.Session(region_name=region)

    profile = os.getenv("AWS_PROFILE_PDF_WORKER", "default")
    return boto3.Session(profile_name=profile, region_name=region)


def _create_boto_config(config: Config, **overrides) -> BotoConfig:
    """Botocore timeouts and retries that keep every call inside the Lambda budget."""
    return BotoConfig(
        connect_timeout=config.aws_connect_timeout,
        read_timeout=config.aws_read_timeout,
        retries={"max_attempts": config.aws_max_attempts, "mode": "standard"},
        **overrides,
    )


def _create_s3_boto_client(session: boto3.Session, config: Config):
    """S3 client signing with SigV4 so presigned URLs carry X-Amz-Expires."""
    return session.client("s3", config=_create_boto_config(config, signature_version="s3v4"))


def _create_sqs_boto_client(session: boto3.Session, config: Config):
    return session.client("sqs", config=_create_boto_config(config))


class DependenciesContainer(DeclarativeContainer):
    """DI container for the application.

    Every provider is a Singleton: clients are built once per Lambda
    container and shared by all concurrent pipelines.
    """

    config = providers.Singleton(Config)

    # Session (Lambda execution role or local AWS profile)
    session = providers.Singleton(
        _create_session,
        region=config.provided.aws_region,
    )

    # S3 dependency chain
    s3_boto_client = providers.Singleton(
        _create_s3_boto_client,
        session=session,
        config=config,
    )

    s3_client = providers.Singleton(
        S3Client,
        client=s3_boto_client,
    )

    document_store = providers.Singleton(
        DocumentStore,
        s3_client=s3_client,
        bucket=config.provided.pdf_bucket,
        input_prefix=config.provided.input_prefix,
        output_prefix=config.provided.output_prefix,
        url_expiry=config.provided.signed_url_expiry,
    )

    # SQS dependency chain
    sqs_boto_client = providers.Singleton(
        _create_sqs_boto_client,
        session=session,
        config=config,
    )

    sqs_client = providers.Singleton(
        SQSClient,
        client=sqs_boto_client,
    )

    message_acknowledger = providers.Singleton(
        MessageAcknowledger,
        sqs_client=sqs_client,
        queue_url=config.provided.sqs_queue_url,
    )

    result_publisher = providers.Singleton(
        ResultPublisher,
        sqs_client=sqs_client,
        queue_url=config.provided.result_queue_url,
    )

    # Chromium renderer (browser launched per render call)
    pdf_renderer = providers.Singleton(
        PdfRenderer,
        executable_path=config.provided.chromium_executable_path,
        headless=config.provided.headless,
        timeout_ms=config.provided.render_timeout_ms,
    )
