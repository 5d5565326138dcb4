"""Example manifest generation for IDE example browsers."""

from .assembler import ManifestAssembler, build_context
from .models import (
    CategoryManifest,
    Diagnostic,
    ExampleRecord,
    FileOpenEntry,
    FilterRule,
    ManifestContext,
    ManifestEntry,
)
from .rules import AttributeResolver, parse_filter_rules, resolve

__all__ = [
    "AttributeResolver",
    "CategoryManifest",
    "Diagnostic",
    "ExampleRecord",
    "FileOpenEntry",
    "FilterRule",
    "ManifestAssembler",
    "ManifestContext",
    "ManifestEntry",
    "build_context",
    "parse_filter_rules",
    "resolve",
]
