"""File-backed store of exported environment variables.

The store file holds one ``export NAME=VALUE`` line per variable. Lines are
kept in append order and a name may appear more than once after ``set``; the
last line for a name wins when the file is read back.

All operations assume a single writer: there is no file locking.
"""
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from evo.core.config import Config
from evo.core.envfile import check_entry, format_line, parse_env_text, parse_line, write_env_file
from evo.core.errors import InvalidVariable, KeyNotFound, StoreFileMissing
from evo.core.files import append_line, read_file, write_file
from evo.services.audit import get_recent_logs, log_action
from evo.services.backup import restore_backup, write_backup


logger = logging.getLogger("evo")


class VariableStore:
    def __init__(self, root: Optional[Path] = None, *, config: Optional[Config] = None):
        config = config or Config()
        if root is not None:
            config = replace(config, home=Path(root))
        self.config = config

    def get_store_path(self) -> Path:
        return self.config.store_path()

    def get_backup_path(self) -> Path:
        return self.config.backup_path()

    def fetch(self) -> Dict[str, str]:
        """Return the stored variables, or the process environment if there is no store file."""
        path = self.get_store_path()
        if not path.exists():
            return dict(os.environ)
        return parse_env_text(read_file(path), path)

    def create(self, env_vars: Mapping[str, str]) -> None:
        """Write a fresh store file from *env_vars*.

        Entries that cannot be stored as a single line (multi-line values taken
        from a real environment, for example) are skipped with a warning, as
        they are by :meth:`backup`.
        """
        path = self.get_store_path()
        entries = _storable(env_vars)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            write_env_file(path, entries)

        self._guard("create", "*", _write)
        logger.info("Created store %s with %d variables", path, len(entries))
        self._audit("create", "*", "success", f"{len(entries)} variables")

    def set(self, name: str, value: str) -> Dict[str, str]:
        check_entry(name, value)
        path = self._require_store()
        env_vars = self.fetch()
        env_vars[name] = value
        self._guard("set", name, lambda: append_line(path, format_line(name, value)))
        logger.info("Set %s in %s", name, path)
        self._audit("set", name, "success")
        return env_vars

    def edit(self, name: str, value: str) -> Dict[str, str]:
        check_entry(name, value)
        path = self._require_store()
        lines, env_vars = self._load(path)
        if name not in env_vars:
            raise KeyNotFound(name)

        rewritten = [format_line(name, value) if line_name == name else raw for raw, line_name in lines]
        self._guard("edit", name, lambda: write_file(path, _join(rewritten)))
        env_vars[name] = value
        logger.info("Edited %s in %s", name, path)
        self._audit("edit", name, "success")
        return env_vars

    def unset(self, name: str) -> Dict[str, str]:
        path = self._require_store()
        lines, env_vars = self._load(path)
        if name not in env_vars:
            raise KeyNotFound(name)

        kept = [raw for raw, line_name in lines if line_name != name]
        self._guard("unset", name, lambda: write_file(path, _join(kept)))
        del env_vars[name]
        logger.info("Unset %s in %s", name, path)
        self._audit("unset", name, "success")
        return env_vars

    def backup(self, env_vars: Optional[Mapping[str, str]] = None) -> Path:
        """Snapshot *env_vars* (default: the current store contents) into the backup file."""
        if env_vars is None:
            env_vars = self.fetch()
        env_vars = _storable(env_vars)
        backup_path = self.get_backup_path()
        self._guard("backup", "*", lambda: write_backup(backup_path, env_vars))
        self._audit("backup", "*", "success", f"{len(env_vars)} variables")
        return backup_path

    def restore(self) -> None:
        backup_path = self.get_backup_path()
        store_path = self.get_store_path()
        self._guard("restore", "*", lambda: restore_backup(backup_path, store_path))
        self._audit("restore", "*", "success")

    def recent_actions(self, limit: Optional[int] = None) -> str:
        if limit is None:
            limit = self.config.audit_limit
        return get_recent_logs(self.config.resolved_backup_dir(), limit)

    def _require_store(self) -> Path:
        path = self.get_store_path()
        if not path.is_file():
            raise StoreFileMissing(path)
        return path

    def _load(self, path: Path) -> Tuple[List[Tuple[str, Optional[str]]], Dict[str, str]]:
        # Pairs each raw line with its variable name (None for blanks and comments).
        text = read_file(path)
        env_vars = parse_env_text(text, path)
        lines: List[Tuple[str, Optional[str]]] = []
        for raw in text.splitlines():
            parsed = parse_line(raw)
            lines.append((raw, parsed[0] if parsed else None))
        return lines, env_vars

    def _guard(self, action: str, name: str, op: Callable[[], object]) -> None:
        try:
            op()
        except OSError as e:
            self._audit(action, name, "failed", str(e))
            raise

    def _audit(self, action: str, name: str, status: str, details: Optional[str] = None) -> None:
        if self.config.audit_enabled:
            log_action(action, name, status, self.config.resolved_backup_dir(), details)


def _join(lines: List[str]) -> str:
    return "".join(line + "\n" for line in lines)


def _storable(env_vars: Mapping[str, str]) -> Dict[str, str]:
    entries: Dict[str, str] = {}
    for name, value in env_vars.items():
        try:
            check_entry(name, value)
        except InvalidVariable as e:
            logger.warning("Skipping %s: %s", name, e)
            continue
        entries[name] = value
    return entries
