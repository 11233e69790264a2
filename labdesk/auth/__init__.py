"""Sessions, credential checks and role-based authorization."""

__all__ = [
    "AuthError",
    "AuthProvider",
    "AuthResult",
    "CorruptSession",
    "FileSessionStore",
    "InvalidCredentials",
    "JWTManager",
    "LocalAuthProvider",
    "MemorySessionStore",
    "SessionService",
    "SessionStore",
    "TokenData",
    "Unauthorized",
    "authorize",
    "is_authorized",
]

from .errors import AuthError, CorruptSession, InvalidCredentials, Unauthorized
from .jwt import JWTManager, TokenData
from .local import LocalAuthProvider
from .provider import AuthProvider, AuthResult
from .session import authorize, is_authorized, SessionService
from .store import FileSessionStore, MemorySessionStore, SessionStore
