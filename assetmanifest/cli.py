"""CLI entrypoints for assetmanifest commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging, get_logger
from .plugin import ManifestPlugin
from .stats import run_stats


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


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetmanifest",
        description="Generate an asset manifest from bundler build output.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write a manifest for the build described by a stats JSON file.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "stats",
        help="Path to the bundler stats JSON file.",
    )
    generate_parser.add_argument(
        "--output-dir",
        default=None,
        help="Build output directory (defaults to outputPath from the stats).",
    )
    generate_parser.add_argument(
        "--config",
        default=".",
        help="Path to .assetmanifest.yml or the directory holding it.",
    )
    generate_parser.add_argument("--file-name", default=None, help="Manifest file name.")
    generate_parser.add_argument(
        "--public-path", default=None, help="Prefix applied to every manifest value."
    )
    generate_parser.add_argument(
        "--base-path", default=None, help="Prefix applied to every manifest key."
    )
    generate_parser.add_argument(
        "--write-to-file",
        action="store_true",
        help="Write the manifest directly in addition to emitting it.",
    )
    generate_parser.add_argument(
        "--print",
        dest="print_manifest",
        action="store_true",
        help="Print the computed manifest to stdout.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for assetmanifest commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    if args.command == "generate":
        try:
            options = load_config(Path(args.config))
            overrides: dict[str, object] = {}
            if args.file_name:
                overrides["file_name"] = args.file_name
            if args.public_path is not None:
                overrides["public_path"] = args.public_path
            if args.base_path is not None:
                overrides["base_path"] = args.base_path
            if args.write_to_file:
                overrides["write_to_file_emit"] = True
            plugin = ManifestPlugin(options, **overrides)
            output_dir = Path(args.output_dir) if args.output_dir else None
            result = run_stats(plugin, Path(args.stats), output_dir)
        except (FileNotFoundError, ConfigError, ValueError) as exc:
            parser.exit(1, f"assetmanifest generate failed: {exc}\n")

        for name, asset in result.assets.items():
            target = result.output_dir / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(asset.source(), encoding="utf-8")  # type: ignore[attr-defined]
            logger.debug("Emitted %s", target)
            print(f"Manifest written to {_relativize(target)}")
        if args.print_manifest:
            print(plugin.options.serialize(result.manifest))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
