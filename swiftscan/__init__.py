"""Batch helpers for indexing Swift package trees."""

from .definitions import find_definition_files
from .root_locator import locate_package_roots
from .type_scanner import extract_types, extract_types_from_file

__all__ = [
    "extract_types",
    "extract_types_from_file",
    "find_definition_files",
    "locate_package_roots",
]

__version__ = "0.1.0"
