from pathlib import Path
from typing import Optional


class EvoError(Exception):
    """Base class for all variable store errors."""


class HomeDirUnresolvable(EvoError, RuntimeError):
    pass


class StoreFileMissing(EvoError, FileNotFoundError):
    def __init__(self, path: Path):
        super().__init__(f"Store file not found: {path} (create it first)")
        self.path = path


class BackupFileMissing(EvoError, FileNotFoundError):
    def __init__(self, path: Path):
        super().__init__(f"Backup file not found: {path}")
        self.path = path


class KeyNotFound(EvoError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Variable not found: {self.name}"


class StoreParseError(EvoError, ValueError):
    def __init__(self, reason: str, *, path: Optional[Path] = None, lineno: Optional[int] = None):
        where = f"{path}:{lineno}" if path is not None else f"line {lineno}"
        super().__init__(f"{where}: {reason}")
        self.path = path
        self.lineno = lineno
        self.reason = reason


class InvalidVariable(EvoError, ValueError):
    pass
