"""Example catalog loading and example directory enumeration."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping

import yaml

from .logging import get_logger
from .models import ExampleRecord

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "__pycache__",
    ".idea",
    ".qtcreator",
    "build",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}

logger = get_logger("catalog")


class CatalogError(RuntimeError):
    """Raised when the example catalog cannot be read."""


def _iter_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if filename in _EXCLUDED_FILES or filename.endswith(".user"):
                continue
            yield current_dir / filename


def scan_example_files(base: Path, directory: str) -> List[str]:
    """Return files under ``base/directory`` as ``directory/<relative path>``."""
    root = (base / directory).expanduser()
    if not root.is_dir():
        raise CatalogError(f"Example directory not found: {root}")
    prefix = directory.strip("/")
    files = []
    for path in _iter_files(root):
        relative = path.relative_to(root).as_posix()
        files.append(f"{prefix}/{relative}" if prefix else relative)
    return sorted(files)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def _meta_tags(item: Mapping[str, Any]) -> Dict[str, List[str]]:
    meta: Dict[str, List[str]] = {}
    raw = item.get("meta")
    if raw is not None and not isinstance(raw, dict):
        raise CatalogError(f"Example {item.get('name')!r}: 'meta' must be a mapping")
    for key, value in (raw or {}).items():
        meta[str(key)] = _as_list(value)
    if "tags" in item:
        meta.setdefault("tag", []).extend(_as_list(item["tags"]))
    return meta


def record_from_dict(item: Mapping[str, Any], base: Path | None = None) -> ExampleRecord:
    """Build an :class:`ExampleRecord` from one catalog item."""
    if not isinstance(item, Mapping):
        raise CatalogError(f"Catalog entries must be mappings, got {type(item).__name__}")
    name = item.get("name")
    if not isinstance(name, str) or not name:
        raise CatalogError(f"Catalog entry without a name: {dict(item)!r}")

    files = _as_list(item.get("files"))
    directory = item.get("directory")
    if not files and isinstance(directory, str) and base is not None:
        files = scan_example_files(base, directory)
        logger.debug("Enumerated %d files for %s", len(files), name)

    return ExampleRecord(
        name=name,
        title=str(item.get("title") or name),
        brief=str(item.get("brief") or ""),
        project_file=str(item.get("project_file") or ""),
        image_file=str(item.get("image_file") or ""),
        files=files,
        meta_tags=_meta_tags(item),
        install_path=str(item.get("install_path") or ""),
        doc_file_base=str(item.get("doc_file_base") or ""),
    )


def _read_catalog(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CatalogError(f"Example catalog not found: {path}") from exc
    if not text.strip():
        return []
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CatalogError(f"Failed to parse {path.name}: {exc}") from exc


def load_catalog(path: Path) -> List[ExampleRecord]:
    """Load example records, sorted by example name."""
    path = path.expanduser().resolve()
    data = _read_catalog(path)
    if isinstance(data, dict):
        data = data.get("examples") or []
    if not isinstance(data, list):
        raise CatalogError(f"{path.name} must contain a list of examples")

    records = [record_from_dict(item, base=path.parent) for item in data]
    records.sort(key=lambda record: record.name)
    logger.debug("Loaded %d examples from %s", len(records), path)
    return records


__all__ = ["CatalogError", "load_catalog", "record_from_dict", "scan_example_files"]
