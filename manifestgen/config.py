"""Configuration loading for manifestgen (.manifestgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .models import FilterRule
from .rules import FilterRuleError, parse_filter_rules

CONFIG_FILENAME = ".manifestgen.yml"
MANIFESTMETA = "manifestmeta"
_RULE_FIELDS = ("names", "attributes", "tags")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class HelpConfig:
    """Help-collection location used to build documentation URLs."""

    namespace: str = ""
    virtual_folder: str = ""


@dataclass
class ManifestGenConfig:
    """Represents the settings defined in .manifestgen.yml."""

    root: Path
    project: str = ""
    output_dir: Optional[Path] = None
    examples_install_path: str = ""
    catalog: Optional[Path] = None
    help: HelpConfig = field(default_factory=HelpConfig)
    templates_dir: Optional[Path] = None
    filters: List[FilterRule] = field(default_factory=list)

    @property
    def resolved_output_dir(self) -> Path:
        return self.output_dir or self.root


def load_config(config_path: Path) -> ManifestGenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ManifestGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    help_data = _as_dict(data.get("help"))
    help_config = HelpConfig(
        namespace=_as_str(help_data.get("namespace")) or "",
        virtual_folder=_as_str(help_data.get("virtual_folder")) or "",
    )

    output_dir_str = _as_str(data.get("output_dir"))
    catalog_str = _as_str(data.get("catalog"))
    templates_dir_str = _as_str(data.get("templates_dir"))

    filters, order = _collect_filters(data)
    try:
        rules = parse_filter_rules(filters, order)
    except FilterRuleError as exc:
        raise ConfigError(f"Invalid {MANIFESTMETA} in {config_file.name}: {exc}") from exc

    return ManifestGenConfig(
        root=root,
        project=_as_str(data.get("project")) or "",
        output_dir=root / output_dir_str if output_dir_str else None,
        examples_install_path=_as_str(data.get("examples_install_path")) or "",
        catalog=root / catalog_str if catalog_str else None,
        help=help_config,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
        filters=rules,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _collect_filters(
    data: Dict[str, Any]
) -> Tuple[Dict[str, Dict[str, List[str]]], Optional[List[str]]]:
    """Gather filter definitions from the nested and the flat dotted forms.

    Nested::

        manifestmeta:
          filters: [highlighted]
          highlighted:
            names: [...]

    Flat, either at the top level or inside ``manifestmeta``::

        manifestmeta.filters: [highlighted]
        manifestmeta.highlighted.names: [...]
    """
    filters: Dict[str, Dict[str, List[str]]] = {}
    order: Optional[List[str]] = None

    def _assign(key: str, value: Any) -> None:
        nonlocal order
        if key == "filters":
            order = _as_str_list(value)
            return
        rule_id, dot, field_name = key.rpartition(".")
        if dot and field_name in _RULE_FIELDS:
            filters.setdefault(rule_id, {})[field_name] = _as_str_list(value)
            return
        if isinstance(value, dict):
            entry = filters.setdefault(key, {})
            for name in _RULE_FIELDS:
                if name in value:
                    entry[name] = _as_str_list(value[name])
            return
        raise ConfigError(f"Unsupported {MANIFESTMETA} key: {key}")

    for key, value in _as_dict(data.get(MANIFESTMETA)).items():
        _assign(str(key), value)

    prefix = MANIFESTMETA + "."
    for key, value in data.items():
        if isinstance(key, str) and key.startswith(prefix):
            _assign(key[len(prefix):], value)

    return filters, order


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, bool):
        return [str(value).lower()]
    if isinstance(value, Sequence):
        result: List[str] = []
        for item in value:
            if isinstance(item, bool):
                result.append(str(item).lower())
            elif isinstance(item, (str, int, float)):
                result.append(str(item))
        return result
    return []
