"""Per-category assembly of manifest entries."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Sequence, Tuple

from .files import prioritize
from .logging import get_logger
from .models import (
    CategoryManifest,
    Diagnostic,
    ExampleRecord,
    FileOpenEntry,
    FilterRule,
    ManifestContext,
    ManifestEntry,
)
from .rules import AttributeResolver
from .tags import clean_module_tags, clean_tags, derive_tags

DEFAULT_DESCRIPTION = "No description available"
EXPECTED_ATTRIBUTES: Tuple[str, ...] = ("imageUrl", "projectPath")
DEMO_PREFIX = "demos"

# (output category, element name per entry)
CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("examples", "example"),
    ("demos", "demo"),
)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def is_demo(example: ExampleRecord) -> bool:
    return example.name.startswith(DEMO_PREFIX)


def in_category(example: ExampleRecord, category: str) -> bool:
    return is_demo(example) == (category == DEMO_PREFIX)


def normalise_directory(path: str) -> str:
    """Return ``path`` with a trailing slash, or an empty string."""
    if path and not path.endswith("/"):
        return path + "/"
    return path


def install_path(example: ExampleRecord, default: str = "") -> str:
    """Install path from the example's ``installpath`` meta tag or ``default``."""
    override = example.install_path
    if not override:
        values = example.meta_tags.get("installpath") or []
        override = values[0] if values else ""
    return normalise_directory(override or default)


def doc_base_url(namespace: str, virtual_folder: str) -> str:
    if not namespace:
        return ""
    return f"qthelp://{namespace}/{virtual_folder}/"


def doc_file_base(project: str, example: ExampleRecord) -> str:
    """Documentation page base name, e.g. ``qtquick-animation-easing-example``."""
    if example.doc_file_base:
        return example.doc_file_base
    raw = f"{project}-{example.name}-example".lower()
    return _NON_ALNUM.sub("-", raw).strip("-")


def build_context(
    project: str,
    *,
    namespace: str = "",
    virtual_folder: str = "",
    examples_install_path: str = "",
) -> ManifestContext:
    """Compute the per-run context once; module words are cleaned here."""
    return ManifestContext(
        project=project,
        module_tags=clean_module_tags(project),
        doc_base_url=doc_base_url(namespace, virtual_folder),
        examples_install_path=normalise_directory(examples_install_path),
    )


class ManifestAssembler:
    """Turns example records into manifest entries grouped by category."""

    def __init__(self, context: ManifestContext, rules: Sequence[FilterRule] = ()) -> None:
        self.context = context
        self.resolver = AttributeResolver(rules)
        self.logger = get_logger("assembler")

    def assemble(self, examples: Iterable[ExampleRecord]) -> List[CategoryManifest]:
        """Build one manifest per category that has at least one example."""
        records = list(examples)
        manifests: List[CategoryManifest] = []
        if not records:
            return manifests
        for category, element in CATEGORIES:
            members = [example for example in records if in_category(example, category)]
            if not members:
                self.logger.debug("No %s found; skipping %s-manifest.xml", category, category)
                continue
            manifests.append(self.assemble_category(category, element, members))
        return manifests

    def assemble_category(
        self, category: str, element: str, examples: Iterable[ExampleRecord]
    ) -> CategoryManifest:
        manifest = CategoryManifest(category=category, element=element, module=self.context.project)
        for example in examples:
            entry, diagnostics = self.assemble_entry(example)
            manifest.entries.append(entry)
            manifest.diagnostics.extend(diagnostics)
        self.logger.debug("Assembled %d %s", len(manifest.entries), category)
        return manifest

    def assemble_entry(self, example: ExampleRecord) -> Tuple[ManifestEntry, List[Diagnostic]]:
        context = self.context
        path = install_path(example, context.examples_install_path)
        doc_url = f"{context.doc_base_url}{doc_file_base(context.project, example)}.html"

        seed: Dict[str, str] = {"name": example.title, "docUrl": doc_url}
        if example.project_file:
            seed["projectPath"] = path + example.project_file
        if example.image_file:
            seed["imageUrl"] = context.doc_base_url + example.image_file

        qualified_name = f"{context.project}/{example.title}"
        resolution = self.resolver.resolve(qualified_name, seed)

        diagnostics: List[Diagnostic] = []
        for attribute in EXPECTED_ATTRIBUTES:
            if attribute not in resolution.attributes:
                message = f"missing attribute {attribute}"
                self.logger.warning("%s: %s", example.name, message)
                diagnostics.append(Diagnostic(example=example.name, message=message))

        candidates = derive_tags(example.title, example.explicit_tags, resolution.tags)
        tags = clean_tags(candidates) | context.module_tags

        files = tuple(
            FileOpenEntry(path=path + entry.path, priority=entry.priority, is_main=entry.is_main)
            for entry in prioritize(example.files, example.base_name)
        )

        entry = ManifestEntry(
            name=example.title,
            doc_url=doc_url,
            attributes=resolution.attributes,
            description=example.brief or DEFAULT_DESCRIPTION,
            tags=tuple(sorted(tags)),
            files_to_open=files,
        )
        return entry, diagnostics


__all__ = [
    "CATEGORIES",
    "DEFAULT_DESCRIPTION",
    "EXPECTED_ATTRIBUTES",
    "ManifestAssembler",
    "build_context",
    "doc_base_url",
    "doc_file_base",
    "in_category",
    "install_path",
    "is_demo",
]
