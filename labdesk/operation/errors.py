import typing as t


class OperationError(Exception):
    """Base class for failures of mutating operations"""


class OperationInFlight(OperationError):
    def __init__(self, key: str):
        super().__init__(f"an operation on {key} is already in progress")
        self.key = key


class OperationCancelled(OperationError):
    def __init__(self, key: str):
        super().__init__(f"operation on {key} was cancelled before it was applied")
        self.key = key


class ValidationFailed(OperationError):
    """Rejected input, named by a message key of the string tables"""

    def __init__(self, message_key: str, **params: t.Any):
        super().__init__(message_key)
        self.message_key = message_key
        self.params = params
