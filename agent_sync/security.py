"""Path safety checks applied before anything is written or removed."""

from pathlib import Path, PurePath
from typing import Callable

from agent_sync.errors import PathTraversalError, SyncAppError
from agent_sync.utils import is_under


PathValidator = Callable[[Path, Path], None]


def validate_path_within_base(base: Path, target: Path) -> None:
    if not is_under(target, base):
        raise PathTraversalError(base, target)


def validate_relative_path(value: str) -> None:
    if not value.strip():
        raise SyncAppError("Path must not be empty")
    path = PurePath(value)
    if path.is_absolute():
        raise SyncAppError(f"Path must be relative: {value}")
    if ".." in path.parts:
        raise SyncAppError(f"Path must not contain '..': {value}")
