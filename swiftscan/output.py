"""Sorted, de-duplicated output helpers shared by the batch commands."""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, TextIO, Tuple, TypeVar

T = TypeVar("T")


def sorted_unique(
    items: Iterable[T], key: Optional[Callable[[T], Any]] = None
) -> List[T]:
    """Return the distinct items in ascending order."""
    return sorted(set(items), key=key)


def path_sort_key(path: str) -> Tuple[str, ...]:
    """Order paths component by component, so ``a/b`` sorts before ``a-b``."""
    return Path(path).parts


def write_artifact(
    lines: Iterable[str],
    *,
    directory: Path | None = None,
    prefix: str = "swiftscan-",
    suffix: str = ".txt",
) -> Path:
    """Write one line per item to a new file that outlives the process.

    The file is created with the platform's temporary-file facility, in
    ``directory`` when given, and is never removed by swiftscan.
    """
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="\n",
        prefix=prefix,
        suffix=suffix,
        dir=directory,
        delete=False,
    ) as handle:
        for line in lines:
            handle.write(f"{line}\n")
    return Path(handle.name)


def emit_lines(lines: Iterable[str], stream: TextIO | None = None) -> None:
    """Print each line to ``stream`` (stdout by default)."""
    target = stream if stream is not None else sys.stdout
    for line in lines:
        print(line, file=target)


__all__ = ["emit_lines", "path_sort_key", "sorted_unique", "write_artifact"]
