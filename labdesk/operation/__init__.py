"""Mutating operations, each applied after a single simulated round trip."""

__all__ = [
    "CancellationToken",
    "OperationCancelled",
    "OperationError",
    "OperationInFlight",
    "OperationRunner",
    "SubmitResult",
    "ValidationFailed",
    # Operation modules
    "admin",
    "coursework",
    "profile",
]

from . import admin, coursework, profile
from .coursework import SubmitResult
from .errors import OperationCancelled, OperationError, OperationInFlight, ValidationFailed
from .runner import CancellationToken, OperationRunner
