"""Session snapshot channel and logging."""

from .channels import SessionChannel
from .markdown_logger import MarkdownLogger

__all__ = ["SessionChannel", "MarkdownLogger"]
