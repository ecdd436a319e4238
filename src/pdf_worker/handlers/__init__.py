"""Handlers package for the PDF worker."""

from pdf_worker.handlers.render import process_batch, process_message

__all__ = [
    "process_batch",
    "process_message",
]
