import logging
import shutil
from pathlib import Path


logger = logging.getLogger("evo")


def read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to read %s: %s", path, e)
        raise


def write_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise


def append_line(path: Path, line: str) -> None:
    """Append *line* to *path*, starting a new line if the file lacks a trailing newline."""
    try:
        with path.open("a+", encoding="utf-8") as f:
            f.seek(0)
            content = f.read()
            if content and not content.endswith("\n"):
                f.write("\n")
            f.write(line + "\n")
    except OSError as e:
        logger.error("Failed to append to %s: %s", path, e)
        raise


def copy_file(src: Path, dst: Path) -> None:
    try:
        shutil.copyfile(src, dst)
    except OSError as e:
        logger.error("Failed to copy %s -> %s: %s", src, dst, e)
        raise


def remove_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.error("Failed to remove %s: %s", path, e)
        raise
