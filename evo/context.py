from dataclasses import dataclass

from evo.core.config import Config
from evo.services.store import VariableStore


@dataclass
class Context:
    config: Config
    store: VariableStore
