"""Library entry points operating on the configured variable store.

Each call loads the configuration (``EVO_*`` settings, optionally from a
``.env`` file that is read but never copied into ``os.environ``) and works on
the store it points to. Front-ends that perform many operations should call
:func:`build_context` once and use ``ctx.store`` directly.
"""
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

from evo.context import Context
from evo.core.config import load_config
from evo.services.store import VariableStore


logger = logging.getLogger("evo")


def build_context(root: Optional[Path] = None, dotenv_path: Optional[Path] = None) -> Context:
    config = load_config(dotenv_path)
    store = VariableStore(root, config=config)
    logger.debug("Variable store at %s", store.get_store_path())
    return Context(config=store.config, store=store)


def get_store_path() -> Path:
    return build_context().store.get_store_path()


def fetch_vars() -> Dict[str, str]:
    return build_context().store.fetch()


def create_store(env_vars: Mapping[str, str]) -> None:
    build_context().store.create(env_vars)


def set_var(name: str, value: str) -> Dict[str, str]:
    return build_context().store.set(name, value)


def edit_var(name: str, value: str) -> Dict[str, str]:
    return build_context().store.edit(name, value)


def unset_var(name: str) -> Dict[str, str]:
    return build_context().store.unset(name)


def backup_vars(env_vars: Optional[Mapping[str, str]] = None) -> Path:
    return build_context().store.backup(env_vars)


def restore_vars() -> None:
    build_context().store.restore()
