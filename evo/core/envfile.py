from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from evo.core.errors import InvalidVariable, StoreParseError
from evo.core.files import read_file, write_file


EXPORT_PREFIX = "export "


def format_line(name: str, value: str) -> str:
    return f"{EXPORT_PREFIX}{name}={value}"


def check_entry(name: str, value: str) -> None:
    """Reject entries that would not read back as the same single line."""
    if not name or name != name.strip() or "=" in name:
        raise InvalidVariable(f"invalid variable name: {name!r}")
    if len(format_line(name, value).splitlines()) != 1:
        raise InvalidVariable(f"line break in variable {name!r}")


def parse_line(raw: str) -> Optional[Tuple[str, str]]:
    """Split one store line into ``(name, value)``.

    Returns None for blank lines and comments. The value is everything after
    the first ``=``, spaces included.
    """
    stripped = raw.strip()
    if not stripped or stripped.startswith("#"):
        return None
    line = raw.rstrip("\r\n").lstrip()
    if line.startswith(EXPORT_PREFIX):
        line = line[len(EXPORT_PREFIX):].lstrip()
    if "=" not in line:
        raise ValueError(f"missing '=' in {raw!r}")
    name, value = line.split("=", 1)
    name = name.strip()
    if not name:
        raise ValueError(f"empty variable name in {raw!r}")
    return name, value


def parse_env_text(text: str, path: Optional[Path] = None) -> Dict[str, str]:
    env_vars: Dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        try:
            parsed = parse_line(raw)
        except ValueError as e:
            raise StoreParseError(str(e), path=path, lineno=lineno) from e
        if parsed is None:
            continue
        name, value = parsed
        env_vars[name] = value
    return env_vars


def render_env(env_vars: Mapping[str, str]) -> str:
    return "".join(format_line(k, v) + "\n" for k, v in sorted(env_vars.items()))


def parse_env_file(path: Path) -> Dict[str, str]:
    return parse_env_text(read_file(path), path)


def write_env_file(path: Path, env_vars: Mapping[str, str]) -> None:
    write_file(path, render_env(env_vars))
