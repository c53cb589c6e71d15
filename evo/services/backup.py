import logging
from pathlib import Path
from typing import Mapping

from evo.core.envfile import write_env_file
from evo.core.errors import BackupFileMissing
from evo.core.files import copy_file, remove_file


logger = logging.getLogger("evo")


def write_backup(backup_path: Path, env_vars: Mapping[str, str]) -> Path:
    """Replace the backup snapshot at *backup_path* with *env_vars*."""
    backup_path.parent.mkdir(parents=True, exist_ok=True)
    remove_file(backup_path)
    write_env_file(backup_path, env_vars)
    logger.info("Backup written to %s (%d variables)", backup_path, len(env_vars))
    return backup_path


def restore_backup(backup_path: Path, store_path: Path) -> None:
    if not backup_path.is_file():
        raise BackupFileMissing(backup_path)
    copy_file(backup_path, store_path)
    logger.info("Restored %s from %s", store_path, backup_path)
