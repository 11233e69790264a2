class StorageError(Exception):
    """Base class for storage failures"""


class EntityNotFound(StorageError, KeyError):
    def __init__(self, kind: str, key: object):
        super().__init__(f"{kind} {key!s} not found")
        self.kind = kind
        self.key = key

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class DuplicateEntity(StorageError):
    def __init__(self, kind: str, field: str, value: object):
        super().__init__(f"{kind} with {field} {value!s} already exists")
        self.kind = kind
        self.field = field
        self.value = value


class EntityInUse(StorageError):
    def __init__(self, kind: str, key: object, reason: str):
        super().__init__(f"{kind} {key!s} is in use: {reason}")
        self.kind = kind
        self.key = key
        self.reason = reason
