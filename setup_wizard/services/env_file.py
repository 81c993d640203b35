"""
Env file model for the setup wizard.

An env file is treated as an ordered list of lines. Lines of the form
``KEY=VALUE`` are addressable by key; everything else (comments, blank
lines, malformed lines) is carried through untouched.
"""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..utils.logging import get_logger

logger = get_logger("env.file")

PathLike = Union[str, Path]


@dataclass
class EnvLine:
    """A single line of an env file, without its ``\\n`` terminator."""

    text: str
    key: Optional[str] = None
    # "\r" for CRLF lines, so rewritten lines keep the file's line endings
    ending: str = ""

    @classmethod
    def parse(cls, text: str) -> "EnvLine":
        ending = ""
        if text.endswith("\r"):
            text, ending = text[:-1], "\r"
        if "=" not in text or text.lstrip().startswith("#"):
            return cls(text=text, ending=ending)
        return cls(text=text, key=text.split("=", 1)[0], ending=ending)

    @property
    def value(self) -> Optional[str]:
        if self.key is None:
            return None
        return self.text.split("=", 1)[1]


class EnvFile:
    """Ordered key/value view over the lines of an env file."""

    def __init__(self, lines: Optional[List[EnvLine]] = None, trailing_newline: bool = False):
        self.lines: List[EnvLine] = lines or []
        self.trailing_newline = trailing_newline

    @classmethod
    def parse(cls, text: str) -> "EnvFile":
        """Parse env file content."""
        if not text:
            return cls()

        raw_lines = text.split("\n")
        trailing_newline = text.endswith("\n")
        if trailing_newline:
            raw_lines.pop()

        return cls([EnvLine.parse(line) for line in raw_lines], trailing_newline)

    @classmethod
    def load(cls, path: PathLike) -> "EnvFile":
        """Load an env file, treating a missing file as empty."""
        path = Path(path)
        if not path.exists():
            logger.debug("Env file not found, starting empty", extra={"path": str(path)})
            return cls()

        # newline="" leaves CRLF endings for EnvLine to carry through
        with open(path, "r", encoding="utf-8", newline="") as f:
            return cls.parse(f.read())

    def __contains__(self, key: str) -> bool:
        return any(line.key == key for line in self.lines)

    def keys(self) -> Iterator[str]:
        seen = set()
        for line in self.lines:
            if line.key is not None and line.key not in seen:
                seen.add(line.key)
                yield line.key

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first line holding ``key``."""
        for line in self.lines:
            if line.key == key:
                return line.value
        return default

    def set(self, key: str, value: str):
        """
        Upsert ``key``.

        The first line holding the key is rewritten in place, keeping its
        line ending, and any later lines with the same key are dropped. A
        missing key is appended with the file's line ending and leaves the
        file newline-terminated.
        """
        text = f"{key}={value}"
        updated: List[EnvLine] = []
        found = False
        dropped = 0

        for line in self.lines:
            if line.key != key:
                updated.append(line)
            elif not found:
                updated.append(EnvLine(text=text, key=key, ending=line.ending))
                found = True
            else:
                dropped += 1

        if not found:
            ending = next((line.ending for line in reversed(self.lines) if line.ending), "")
            if updated and not self.trailing_newline:
                updated[-1].ending = ending
            updated.append(EnvLine(text=text, key=key, ending=ending))
            self.trailing_newline = True

        if dropped:
            logger.warning(
                f"Removed duplicate {key} entries",
                extra={"key": key, "duplicates": dropped},
            )

        self.lines = updated

    def to_text(self) -> str:
        text = "\n".join(line.text + line.ending for line in self.lines)
        if self.lines and self.trailing_newline:
            text += "\n"
        return text

    def save(self, path: PathLike):
        """Write the whole file in a single call."""
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(self.to_text())


def mirror_env_file(source: PathLike, target: PathLike) -> Path:
    """
    Copy an env file to a secondary location, creating parent directories.

    Returns:
        Path of the written copy
    """
    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    logger.info("Synced env file", extra={"source": str(source), "target": str(target)})
    return target
