"""Renders category manifests to XML documents."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from .logging import get_logger
from .models import CategoryManifest

MANIFEST_TEMPLATE = "manifest.xml.j2"


def cdata(text: str) -> Markup:
    """Wrap ``text`` in CDATA, splitting any embedded ``]]>`` terminator."""
    body = str(text).replace("]]>", "]]]]><![CDATA[>")
    return Markup(f"<![CDATA[{body}]]>")


class ManifestWriter:
    """Writes ``<category>-manifest.xml`` files from assembled manifests."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)
        self.logger = get_logger("writer")

    def render(self, manifest: CategoryManifest) -> str:
        template = self._env.get_template(MANIFEST_TEMPLATE)
        return template.render(
            module=manifest.module,
            category=manifest.category,
            element=manifest.element,
            entries=manifest.entries,
        )

    def write(
        self, manifest: CategoryManifest, output_dir: Path, document: Optional[str] = None
    ) -> Path:
        """Write ``manifest`` into ``output_dir``; I/O errors propagate.

        ``document`` is text already produced by :meth:`render`; without it the
        manifest is rendered here.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / manifest.filename
        if document is None:
            document = self.render(manifest)
        path.write_text(document, encoding="utf-8")
        self.logger.info("Wrote %s (%d entries)", path, len(manifest.entries))
        return path

    def write_all(
        self,
        manifests: List[CategoryManifest],
        output_dir: Path,
        documents: Optional[Mapping[str, str]] = None,
    ) -> List[Path]:
        rendered = documents or {}
        return [
            self.write(manifest, output_dir, rendered.get(manifest.filename))
            for manifest in manifests
        ]

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.filters["cdata"] = cdata
        return env


__all__ = ["MANIFEST_TEMPLATE", "ManifestWriter", "cdata"]
