"""Persistence boundary for the current session.

A session store holds small JSON-compatible records under string keys. The
session service uses exactly one key, `current_session`.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
import typing as t
from abc import abstractmethod
from pathlib import Path

import labdesk.lib.json as lj

from .errors import CorruptSession

CurrentSessionKey: t.Final = "current_session"

Record = dict[str, t.Any]


class SessionStore(t.Protocol):
    @abstractmethod
    def get(self, key: str) -> Record | None:
        """Return the record under key, None if absent.

        Raises:
            CorruptSession: if a record exists but cannot be decoded
        """
        ...

    @abstractmethod
    def set(self, key: str, value: Record) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove the record under key; absent keys are ignored"""
        ...


class MemorySessionStore(SessionStore):
    """Process-lifetime store"""

    def __init__(self) -> None:
        self._records: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Record | None:
        with self._lock:
            raw = self._records.get(key)
        if raw is None:
            return None
        return t.cast(Record, lj.loads(raw))

    def set(self, key: str, value: Record) -> None:
        # keep the encoded form so callers cannot mutate what is stored
        raw = lj.dumps(value)
        with self._lock:
            self._records[key] = raw

    def remove(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)


class FileSessionStore(SessionStore):
    """
    All records in one JSON object on disk. Writes go to a temporary file in
    the same directory that then replaces the original, so a crash never
    leaves a half-written file behind.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> Record:
        try:
            raw = self.path.read_text(encoding="utf8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise CorruptSession(f"{self.path}: {e}") from e
        if not raw.strip():
            return {}
        try:
            data = lj.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptSession(f"{self.path}: {e}") from e
        if not isinstance(data, dict):
            raise CorruptSession(f"{self.path}: expected an object, found {type(data).__name__}")
        return t.cast(Record, data)

    def _write(self, data: Record) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf8") as f:
                f.write(lj.dumps(data, indent=2, sort_keys=True))
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise

    def get(self, key: str) -> Record | None:
        with self._lock:
            record = self._read().get(key)
        if record is None:
            return None
        if not isinstance(record, dict):
            raise CorruptSession(f"{self.path}: {key} is not an object")
        return t.cast(Record, record)

    def set(self, key: str, value: Record) -> None:
        with self._lock:
            try:
                data = self._read()
            except CorruptSession:
                # a corrupt file is replaced wholesale
                data = {}
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            try:
                data = self._read()
            except CorruptSession:
                data = {}
            else:
                if key not in data:
                    return
            data.pop(key, None)
            self._write(data)
