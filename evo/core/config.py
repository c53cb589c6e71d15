import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from evo.core.errors import HomeDirUnresolvable


DEFAULT_STORE_NAME = ".evo"
BACKUP_NAME = ".evo.bk"
BACKUP_SUBDIR = Path(".local") / "share" / "evo"


def resolve_home() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirUnresolvable("Could not determine the user's home directory") from e


@dataclass(frozen=True)
class Config:
    home: Optional[Path] = None
    store_name: str = DEFAULT_STORE_NAME
    backup_dir: Optional[Path] = None
    audit_enabled: bool = False
    audit_limit: int = 50
    log_level: str = "INFO"

    def store_root(self) -> Path:
        return self.home if self.home is not None else resolve_home()

    def store_path(self) -> Path:
        return self.store_root() / self.store_name

    def resolved_backup_dir(self) -> Path:
        return self.backup_dir or (self.store_root() / BACKUP_SUBDIR)

    def backup_path(self) -> Path:
        return self.resolved_backup_dir() / BACKUP_NAME


def load_config(dotenv_path: Optional[Path] = None) -> Config:
    # .env values are read without touching os.environ; real environment wins.
    settings: Dict[str, str] = {k: v for k, v in dotenv_values(dotenv_path).items() if v is not None}
    settings.update(os.environ)

    home_str = (settings.get("EVO_HOME", "") or "").strip()
    store_name = (settings.get("EVO_STORE_NAME", DEFAULT_STORE_NAME) or DEFAULT_STORE_NAME).strip() or DEFAULT_STORE_NAME
    backup_dir_str = (settings.get("EVO_BACKUP_DIR", "") or "").strip()
    audit_enabled = settings.get("EVO_AUDIT_ENABLED", "false").lower() in ("true", "1", "yes")
    audit_limit_str = settings.get("EVO_AUDIT_LIMIT", "50")
    log_level = (settings.get("EVO_LOG_LEVEL", "INFO") or "INFO").strip().upper()

    if "/" in store_name:
        raise RuntimeError(f"EVO_STORE_NAME must be a bare file name, got: {store_name}")

    try:
        audit_limit = int(audit_limit_str)
    except ValueError as e:
        raise RuntimeError(f"EVO_AUDIT_LIMIT must be integer, got: {audit_limit_str}") from e

    if log_level not in logging.getLevelNamesMapping():
        raise RuntimeError(f"EVO_LOG_LEVEL is not a logging level: {log_level}")

    # Handlers belong to the host application.
    logging.getLogger("evo").setLevel(log_level)

    return Config(
        home=Path(home_str).expanduser() if home_str else None,
        store_name=store_name,
        backup_dir=Path(backup_dir_str).expanduser() if backup_dir_str else None,
        audit_enabled=audit_enabled,
        audit_limit=audit_limit,
        log_level=log_level,
    )
