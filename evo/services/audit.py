"""Audit trail for variable store mutations."""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional


logger = logging.getLogger("evo")

AUDIT_FILE = "audit.log"


def log_action(
    action: str,
    name: str,
    status: str,
    log_dir: Path,
    details: Optional[str] = None,
) -> None:
    """Append one store mutation to audit.log.

    Args:
        action: Operation name (create, set, edit, unset, backup, restore)
        name: Variable name the operation touched, or "*" for whole-file operations
        status: Operation result (success, failed)
        log_dir: Directory holding audit.log
        details: Optional additional details or error message
    """
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / AUDIT_FILE
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        details_str = f" | {details}" if details else ""
        log_entry = f"{timestamp} | {action} | {name} | {status}{details_str}\n"

        with log_file.open("a", encoding="utf-8") as f:
            f.write(log_entry)

        logger.debug("Audit: %s on %s -> %s", action, name, status)
    except OSError as e:
        logger.error("Failed to write audit log: %s", e)


def get_recent_logs(log_dir: Path, limit: int = 50) -> str:
    """Get recent audit log entries.

    Args:
        log_dir: Directory holding audit.log
        limit: Maximum number of recent entries to return

    Returns:
        Recent entries joined into one string, oldest first
    """
    log_file = log_dir / AUDIT_FILE
    if not log_file.exists():
        return "Audit log is empty."

    with log_file.open("r", encoding="utf-8") as f:
        lines = f.readlines()

    if limit <= 0:
        return ""
    recent = lines[-limit:] if len(lines) > limit else lines
    return "".join(recent)
