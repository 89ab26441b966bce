"""Core utilities and shared components for micro-fs."""

from .config import settings
from .exceptions import MicroFSError, ValidationError
from .observability import get_logger, get_tracer

__all__ = ["settings", "MicroFSError", "ValidationError", "get_logger", "get_tracer"]
