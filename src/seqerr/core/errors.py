"""
Exception types raised by the error-model engine.

Only two conditions are surfaced to callers: malformed arguments
(short parameter vectors, unknown models, masks outside the alphabet)
and internal inconsistencies inside a model implementation.
"""

from typing import Optional


class SeqErrError(Exception):
    """Base exception for seqerr errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


class InvalidArgument(SeqErrError, ValueError):
    """Raised when a caller passes an argument the model cannot accept."""
    pass


class InternalInconsistency(SeqErrError, AssertionError):
    """Raised when a model reports mismatched parameter metadata."""
    pass
