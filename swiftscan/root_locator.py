"""Package root discovery for Swift package trees."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Set

from .logging import get_logger
from .models import RootLocation
from .output import path_sort_key, sorted_unique

MARKER_FILENAME = "Package.swift"
BUILD_DIR_NAME = ".build"
BUILD_PATH_FRAGMENT = f"/{BUILD_DIR_NAME}/"

logger = get_logger("root_locator")


def is_package_root(directory: str | Path) -> bool:
    """Return True when ``directory`` directly contains a ``Package.swift`` file."""
    return Path(directory, MARKER_FILENAME).is_file()


def is_build_artifact_path(path: str) -> bool:
    """Return True when ``path`` lies below a ``.build`` directory.

    This is a substring test on the path string, so ``my.build/`` does not
    match and a relative path starting with ``.build/`` does not either.
    """
    return BUILD_PATH_FRAGMENT in path


def _is_regular_file(path: str) -> bool:
    return not os.path.islink(path) and os.path.isfile(path)


def _log_walk_error(exc: OSError) -> None:
    logger.debug("Skipping unreadable entry %s: %s", exc.filename, exc.strerror)


def iter_marker_files(root: str) -> Iterator[str]:
    """Yield every ``Package.swift`` file below ``root`` without following links."""
    if _is_regular_file(root):
        if os.path.basename(root) == MARKER_FILENAME:
            yield root
        return

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        for filename in filenames:
            if filename != MARKER_FILENAME:
                continue
            path = os.path.join(dirpath, filename)
            if _is_regular_file(path):
                yield path


def find_nested_roots(root: str) -> list[str]:
    """Return the directories below ``root`` holding a marker outside ``.build``."""
    found: Set[str] = set()
    for marker in iter_marker_files(root):
        if is_build_artifact_path(marker):
            logger.debug("Ignoring build artifact %s", marker)
            continue
        found.add(os.path.dirname(marker))
    return sorted_unique(found, key=path_sort_key)


def locate_package_roots(root: str | Path) -> RootLocation:
    """Work out which directories under ``root`` are package roots.

    A root that is itself a package is reported alone and its subtree is not
    walked. Otherwise the root is reported unless it is named ``.build``,
    followed by every nested package root found outside ``.build`` trees.
    A missing root is not an error; it simply has no nested roots.
    """
    root_str = os.fspath(root)

    if is_package_root(root_str):
        logger.debug("%s is a package root", root_str)
        return RootLocation(root=root_str, include_root=True, short_circuit=True)

    # An empty name (e.g. "/" or ".") cannot be ".build", so it is reported.
    include_root = Path(root_str).name != BUILD_DIR_NAME
    nested = find_nested_roots(root_str)
    logger.debug("Found %d nested package root(s) under %s", len(nested), root_str)
    return RootLocation(root=root_str, include_root=include_root, nested=nested)


__all__ = [
    "BUILD_DIR_NAME",
    "BUILD_PATH_FRAGMENT",
    "MARKER_FILENAME",
    "find_nested_roots",
    "is_build_artifact_path",
    "is_package_root",
    "iter_marker_files",
    "locate_package_roots",
]
