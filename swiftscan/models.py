"""Core data models shared across swiftscan components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class TypeScan:
    """Result of scanning one source file for candidate type names."""

    source: Path
    names: Tuple[str, ...]
    artifact: Path


@dataclass(frozen=True)
class RootLocation:
    """Package roots discovered below a starting directory."""

    root: str
    include_root: bool
    short_circuit: bool = False
    nested: List[str] = field(default_factory=list)

    def lines(self) -> Iterator[str]:
        """Yield directories in the order the locator reports them."""
        if self.include_root:
            yield self.root
        yield from self.nested


@dataclass(frozen=True)
class DefinitionSearch:
    """Files that define any of the requested type names."""

    names: Tuple[str, ...]
    search_roots: Tuple[str, ...]
    files: Tuple[str, ...]
    artifact: Path
