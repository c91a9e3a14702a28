"""Locate the source files that declare a set of type names."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Set

from .config import DefinitionsConfig
from .logging import get_logger
from .models import DefinitionSearch
from .output import path_sort_key, sorted_unique, write_artifact
from .root_locator import locate_package_roots

logger = get_logger("definitions")


def read_type_names(types_file: str | Path) -> List[str]:
    """Return the non-empty, trimmed lines of a type-name file."""
    text = Path(types_file).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines() if line.strip()]


def build_definition_pattern(
    names: Sequence[str], keywords: Sequence[str]
) -> Optional[re.Pattern[str]]:
    """Compile a pattern matching ``<keyword> <Name>`` declarations."""
    if not names or not keywords:
        return None
    keyword_part = "|".join(re.escape(keyword) for keyword in keywords)
    name_part = "|".join(re.escape(name) for name in names)
    return re.compile(rf"\b(?:{keyword_part})\s+(?:{name_part})\b")


def search_roots(root: str | Path) -> List[str]:
    """Return every directory the locator reports for ``root``, sorted and unique."""
    return sorted_unique(locate_package_roots(root).lines(), key=path_sort_key)


def is_allowed_file(
    path: str, extensions: Iterable[str], exclude_fragments: Iterable[str]
) -> bool:
    """Return True for files with an allowed extension outside excluded paths."""
    suffix = os.path.splitext(path)[1].lstrip(".").lower()
    if not suffix or suffix not in {ext.lower() for ext in extensions}:
        return False
    return not any(fragment in path for fragment in exclude_fragments)


def _iter_files(root: str) -> Iterator[str]:
    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in filenames:
            path = os.path.join(dirpath, filename)
            if not os.path.islink(path) and os.path.isfile(path):
                yield path


def _file_matches(path: str, pattern: re.Pattern[str]) -> bool:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable file %s: %s", path, exc)
        return False
    return pattern.search(content) is not None


def find_definition_files(
    types_file: str | Path,
    root: str | Path,
    *,
    config: DefinitionsConfig | None = None,
    output_dir: Path | None = None,
) -> DefinitionSearch:
    """Search every package root under ``root`` for declarations of the listed types.

    The matching file paths are written, sorted and unique, to a new artifact.
    """
    settings = config or DefinitionsConfig()
    names = read_type_names(types_file)
    logger.debug("Loaded %d type name(s) from %s", len(names), types_file)

    pattern = build_definition_pattern(names, settings.keywords)
    if pattern is not None:
        logger.debug("Definition pattern: %s", pattern.pattern)

    roots = search_roots(root)
    logger.debug("Search roots (%d): %s", len(roots), ", ".join(roots))

    found: Set[str] = set()
    if pattern is not None:
        for search_root in roots:
            logger.debug("Searching in directory: %s", search_root)
            for path in _iter_files(search_root):
                if not is_allowed_file(
                    path, settings.extensions, settings.exclude_fragments
                ):
                    continue
                if _file_matches(path, pattern):
                    logger.debug("Matched: %s", path)
                    found.add(path)

    files = sorted_unique(found, key=path_sort_key)
    logger.debug("Total unique files found: %d", len(files))
    artifact = write_artifact(files, directory=output_dir, prefix="swiftscan-definitions-")
    return DefinitionSearch(
        names=tuple(names),
        search_roots=tuple(roots),
        files=tuple(files),
        artifact=artifact,
    )


__all__ = [
    "build_definition_pattern",
    "find_definition_files",
    "is_allowed_file",
    "read_type_names",
    "search_roots",
]
