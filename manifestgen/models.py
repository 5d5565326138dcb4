"""Core data models shared across manifestgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

WILDCARD = "*"


class PatternKind(Enum):
    """How a filter name pattern matches qualified example names."""

    EXACT = "exact"
    CATCH_ALL = "catch_all"
    PREFIX = "prefix"


@dataclass(frozen=True)
class NamePattern:
    """A filter name pattern, classified once when the rule is loaded."""

    source: str
    kind: PatternKind
    text: str = ""

    @classmethod
    def compile(cls, pattern: str) -> "NamePattern":
        index = pattern.find(WILDCARD)
        if index == -1:
            return cls(source=pattern, kind=PatternKind.EXACT, text=pattern)
        if index == 0:
            return cls(source=pattern, kind=PatternKind.CATCH_ALL)
        return cls(source=pattern, kind=PatternKind.PREFIX, text=pattern[:index])

    @property
    def drops_suffix(self) -> bool:
        """True when text after the wildcard is ignored by prefix matching."""
        return self.kind is PatternKind.PREFIX and len(self.source) > len(self.text) + 1

    def matches(self, qualified_name: str) -> bool:
        if self.kind is PatternKind.CATCH_ALL:
            return True
        if self.kind is PatternKind.EXACT:
            return qualified_name == self.text
        return qualified_name.startswith(self.text)


@dataclass(frozen=True)
class FilterRule:
    """Configured mapping from name patterns to extra attributes and tags."""

    id: str
    patterns: Tuple[NamePattern, ...]
    attributes: Tuple[Tuple[str, str], ...] = ()
    tags: FrozenSet[str] = frozenset()

    def matches(self, qualified_name: str) -> bool:
        return any(pattern.matches(qualified_name) for pattern in self.patterns)


@dataclass
class ExampleRecord:
    """Example metadata as supplied by the documentation catalog."""

    name: str
    title: str
    brief: str = ""
    project_file: str = ""
    image_file: str = ""
    files: List[str] = field(default_factory=list)
    meta_tags: Dict[str, List[str]] = field(default_factory=dict)
    install_path: str = ""
    doc_file_base: str = ""

    @property
    def explicit_tags(self) -> List[str]:
        return list(self.meta_tags.get("tag", []))

    @property
    def base_name(self) -> str:
        """Example name without its directory part."""
        return self.name[self.name.rfind("/") + 1 :]


@dataclass(frozen=True)
class FileOpenEntry:
    """A file the IDE should open when the example is launched."""

    path: str
    priority: int
    is_main: bool = False


@dataclass(frozen=True)
class Diagnostic:
    """Advisory, non-fatal notice about an example."""

    example: str
    message: str


@dataclass(frozen=True)
class ManifestEntry:
    """Fully resolved descriptor for one example."""

    name: str
    doc_url: str
    attributes: Mapping[str, str]
    description: str
    tags: Tuple[str, ...]
    files_to_open: Tuple[FileOpenEntry, ...]

    @property
    def main_file(self) -> Optional[FileOpenEntry]:
        return next((entry for entry in self.files_to_open if entry.is_main), None)


@dataclass(frozen=True)
class ManifestContext:
    """Per-run, read-only inputs shared by every example."""

    project: str
    module_tags: FrozenSet[str] = frozenset()
    doc_base_url: str = ""
    examples_install_path: str = ""


@dataclass
class CategoryManifest:
    """Entries destined for one output document (e.g. examples-manifest.xml)."""

    category: str
    element: str
    module: str
    entries: List[ManifestEntry] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return f"{self.category}-manifest.xml"


__all__ = [
    "CategoryManifest",
    "Diagnostic",
    "ExampleRecord",
    "FileOpenEntry",
    "FilterRule",
    "ManifestContext",
    "ManifestEntry",
    "NamePattern",
    "PatternKind",
    "WILDCARD",
]
