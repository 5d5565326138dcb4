"""Pipeline orchestration for manifest generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .assembler import ManifestAssembler, build_context
from .catalog import CatalogError, load_catalog
from .config import ManifestGenConfig, load_config
from .logging import get_logger
from .models import CategoryManifest, Diagnostic, ExampleRecord
from .writer import ManifestWriter


@dataclass
class GenerationOutcome:
    """Result of a manifest generation run."""

    manifests: List[CategoryManifest]
    documents: Dict[str, str] = field(default_factory=dict)
    written: List[Path] = field(default_factory=list)
    dry_run: bool = False

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return [diagnostic for manifest in self.manifests for diagnostic in manifest.diagnostics]


class Orchestrator:
    """Coordinates config loading, assembly and writing of manifest files."""

    def __init__(self, writer: ManifestWriter | None = None) -> None:
        self._writer = writer
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str | Path,
        *,
        catalog: str | Path | None = None,
        output_dir: str | Path | None = None,
        dry_run: bool = False,
    ) -> GenerationOutcome:
        """Generate manifest files for the project configured at ``path``."""
        config = load_config(Path(path))
        self.logger.info("Generating manifests for %s", config.project or config.root)
        examples = self._load_examples(config, catalog)

        manifests = self.assemble(config, examples)
        writer = self._resolve_writer(config)
        outcome = GenerationOutcome(manifests=manifests, dry_run=dry_run)
        for manifest in manifests:
            outcome.documents[manifest.filename] = writer.render(manifest)

        if not manifests:
            self.logger.info("No examples found; no manifest files written")
            return outcome
        if dry_run:
            self.logger.info("Dry-run completed; manifest files not written")
            return outcome

        target = Path(output_dir) if output_dir is not None else config.resolved_output_dir
        outcome.written = writer.write_all(manifests, target.expanduser(), outcome.documents)
        if outcome.diagnostics:
            self.logger.info("%d advisory warning(s) emitted", len(outcome.diagnostics))
        return outcome

    def inspect(self, path: str | Path, *, catalog: str | Path | None = None) -> List[CategoryManifest]:
        """Assemble manifests without rendering them."""
        config = load_config(Path(path))
        return self.assemble(config, self._load_examples(config, catalog))

    def assemble(
        self, config: ManifestGenConfig, examples: Sequence[ExampleRecord]
    ) -> List[CategoryManifest]:
        if not config.project:
            self.logger.warning("No 'project' configured; module tags and doc URLs will be incomplete")
        context = build_context(
            config.project,
            namespace=config.help.namespace,
            virtual_folder=config.help.virtual_folder,
            examples_install_path=config.examples_install_path,
        )
        self.logger.debug(
            "Loaded %d filter rule(s); module tags: %s",
            len(config.filters),
            ", ".join(sorted(context.module_tags)) or "(none)",
        )
        return ManifestAssembler(context, config.filters).assemble(examples)

    def _load_examples(
        self, config: ManifestGenConfig, catalog: str | Path | None
    ) -> List[ExampleRecord]:
        catalog_path: Optional[Path] = Path(catalog) if catalog is not None else config.catalog
        if catalog_path is None:
            raise CatalogError("No example catalog configured; pass --catalog or set 'catalog'")
        examples = load_catalog(catalog_path)
        self.logger.debug("Catalog lists %d example(s)", len(examples))
        return examples

    def _resolve_writer(self, config: ManifestGenConfig) -> ManifestWriter:
        if self._writer is not None:
            return self._writer
        if config.templates_dir is not None:
            self.logger.debug("Using custom templates from %s", config.templates_dir)
        return ManifestWriter(config.templates_dir)


__all__ = ["GenerationOutcome", "Orchestrator"]
