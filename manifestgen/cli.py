"""CLI entrypoints for manifestgen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from .catalog import CatalogError
from .config import ConfigError
from .logging import configure_logging
from .models import CategoryManifest
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project directory or .manifestgen.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Example catalog (YAML or JSON); overrides the configured 'catalog'.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug-level logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manifestgen",
        description="Generate example manifest files for IDE example browsers.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write examples-manifest.xml and demos-manifest.xml.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_common_arguments(generate_parser)
    generate_parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for manifest files; overrides the configured 'output_dir'.",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print manifests instead of writing them.",
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print resolved attributes, tags and files per example as JSON.",
    )
    _add_verbose_option(inspect_parser, suppress_default=True)
    _add_common_arguments(inspect_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for manifestgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    orchestrator = Orchestrator()

    if args.command == "generate":
        dry_run = bool(getattr(args, "dry_run", False))
        try:
            outcome = orchestrator.run(
                args.path,
                catalog=args.catalog,
                output_dir=args.output_dir,
                dry_run=dry_run,
            )
        except (ConfigError, CatalogError) as exc:
            parser.exit(1, f"manifestgen generate failed: {exc}\n")
        except OSError as exc:
            parser.exit(1, f"manifestgen generate failed: {exc}\nRun with --verbose for more details.\n")
        if not outcome.manifests:
            print("No examples found; nothing to write")
        elif dry_run:
            for filename, document in outcome.documents.items():
                print(f"--- {filename} (dry-run)")
                print(document, end="")
        else:
            for path in outcome.written:
                print(f"Manifest written to {_relativize(path)}")
    elif args.command == "inspect":
        try:
            manifests = orchestrator.inspect(args.path, catalog=args.catalog)
        except (ConfigError, CatalogError) as exc:
            parser.exit(1, f"manifestgen inspect failed: {exc}\n")
        except OSError as exc:
            parser.exit(1, f"manifestgen inspect failed: {exc}\nRun with --verbose for more details.\n")
        print(json.dumps(_inspect_payload(manifests), indent=2))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _inspect_payload(manifests: List[CategoryManifest]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for manifest in manifests:
        payload[manifest.category] = [
            {
                "attributes": dict(entry.attributes),
                "tags": list(entry.tags),
                "files": [
                    {"path": item.path, "priority": item.priority, "main": item.is_main}
                    for item in entry.files_to_open
                ],
            }
            for entry in manifest.entries
        ]
        payload.setdefault("warnings", []).extend(
            f"{diagnostic.example}: {diagnostic.message}" for diagnostic in manifest.diagnostics
        )
    return payload


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
