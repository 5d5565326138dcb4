"""Helper utilities for constructing temporary manifestgen projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from manifestgen.config import CONFIG_FILENAME


class ProjectBuilder:
    """Writes a config, an example catalog and example sources into a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def config(self, content: str) -> Path:
        self.write({CONFIG_FILENAME: content})
        return self.root / CONFIG_FILENAME

    def catalog(self, content: str, name: str = "examples.yml") -> Path:
        self.write({name: content})
        return self.root / name

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["ProjectBuilder"]
