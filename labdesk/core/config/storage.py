from __future__ import annotations

import typing as t
from pathlib import Path

from .base import BaseSettings


class SessionSettings(BaseSettings):
    """
    Where the current session actor is kept between processes.

    `memory` keeps it for the life of the process only; `file` keeps a JSON
    record at `path`, or under the XDG state directory when no path is given.
    """

    backend: t.Literal["memory", "file"] = "file"
    path: Path | None = None


class StorageSettings(BaseSettings):
    seed: t.Literal["demo", "none"] = "demo"
    session: SessionSettings = SessionSettings()
