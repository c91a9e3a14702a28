"""Candidate type-name extraction from Swift-style source files.

The scanner is a line heuristic, not a lexer. Each line has every character
that is not an ASCII letter or digit replaced by a space, is trimmed, and is
skipped when empty or when it starts with ``import `` or ``//``. The remaining
whitespace-separated tokens are accepted when they look like an uppercase-led
identifier.

Punctuation is removed before the prefix check and before tokenization, so
the ``//`` skip and the ``[Name]`` token form never trigger on real input.
Names inside brackets or after ``//`` are still picked up through the plain
identifier form.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional, Set, Tuple

from .logging import get_logger
from .models import TypeScan
from .output import sorted_unique, write_artifact

_SIMPLE_NAME = re.compile(r"[A-Z][A-Za-z0-9]+")
_BRACKETED_NAME = re.compile(r"\[([A-Z][A-Za-z0-9]+)\]")

_SKIP_PREFIXES = ("import ", "//")

logger = get_logger("type_scanner")


def normalize_line(line: str) -> str:
    """Replace every character that is not an ASCII letter or digit with a space."""
    return "".join(char if char.isascii() and char.isalnum() else " " for char in line)


def should_skip(normalized: str) -> bool:
    """Return True when a normalized line yields no tokens."""
    stripped = normalized.strip()
    return not stripped or stripped.startswith(_SKIP_PREFIXES)


def classify_token(token: str) -> Optional[str]:
    """Return the type name carried by ``token``, or None."""
    if _SIMPLE_NAME.fullmatch(token):
        return token
    match = _BRACKETED_NAME.fullmatch(token)
    if match:
        return match.group(1)
    return None


def extract_types(lines: Iterable[str]) -> Tuple[str, ...]:
    """Collect the ascending, unique type names found in ``lines``."""
    names: Set[str] = set()
    for number, line in enumerate(lines, start=1):
        normalized = normalize_line(line)
        if should_skip(normalized):
            logger.debug("Skipping line %d", number)
            continue
        for token in normalized.split():
            name = classify_token(token)
            if name is not None:
                names.add(name)
    return tuple(sorted_unique(names))


def _read_lines(path: Path) -> Iterable[str]:
    # Lines end at "\n" only; a lone "\r" stays inside the line.
    with path.open("rb") as handle:
        for raw in handle:
            raw = raw.removesuffix(b"\n").removesuffix(b"\r")
            try:
                yield raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise OSError(f"{path}: stream did not contain valid UTF-8") from exc


def extract_types_from_file(
    source: str | Path, *, output_dir: Path | None = None
) -> TypeScan:
    """Scan ``source`` and write its type names to a new artifact file."""
    source_path = Path(source)
    names = extract_types(_read_lines(source_path))
    logger.debug("Found %d type name(s) in %s", len(names), source_path)

    artifact = write_artifact(names, directory=output_dir, prefix="swiftscan-types-")
    logger.debug("Wrote type names to %s", artifact)
    return TypeScan(source=source_path, names=names, artifact=artifact)


__all__ = [
    "classify_token",
    "extract_types",
    "extract_types_from_file",
    "normalize_line",
    "should_skip",
]
