#!/usr/bin/env python3
"""
fragexport CLI

A tool for marking GraphQL fragments that are used outside their defining
file with an @export directive.
"""

import argparse
import sys
from pathlib import Path

from config import DUPLICATE_MODES, load_settings, normalize_extension
from exporters import to_text, to_json
from fragments.errors import ConfigError, FragmentExportError, WriteError
from logconfig import configure_logging
from rewriter.pipeline import export_fragments


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="fragexport",
        description="Add @export to GraphQL fragments that are spread from other files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fragexport .                       # Annotate all .graphql files under the current directory
  fragexport src --dry-run           # Show what would change without writing
  fragexport src --check             # Exit with status 1 if any file needs annotating
  fragexport . --ext .graphql .gql   # Also scan .gql files
  fragexport . -f json -o report.json
        """,
    )

    # Positional arguments
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Root directory to scan (default: current directory)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Report file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )

    parser.add_argument(
        "--ascii-style",
        action="store_true",
        help="Use pure ASCII instead of Unicode tree characters in text reports",
    )

    # Scanning options
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file (default: .fragexport.yml in the root, if present)",
    )

    parser.add_argument(
        "--ext",
        nargs="+",
        default=None,
        help="File extensions to scan (e.g., .graphql .gql)",
    )

    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Additional directory names to exclude",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum directory depth to scan",
    )

    # Run options
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute annotations without writing any file",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Do not write; exit with status 1 if any file would be rewritten",
    )

    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip files that fail to parse instead of aborting the run",
    )

    parser.add_argument(
        "--on-duplicate",
        choices=DUPLICATE_MODES,
        default=None,
        help="How to handle fragment names defined in several files (default: warn)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Increase log verbosity",
    )

    return parser.parse_args(args)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(verbose=parsed.verbose)

    root = Path(parsed.root).resolve()
    if not root.is_dir():
        print(f"Error: '{parsed.root}' is not a directory", file=sys.stderr)
        return 1

    # Settings from the config file, then command line overrides
    try:
        settings = load_settings(root, Path(parsed.config) if parsed.config else None)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.ext:
        settings.extensions = {normalize_extension(ext) for ext in parsed.ext}
    if parsed.exclude_dir:
        settings.exclude_dirs |= set(parsed.exclude_dir)
    if parsed.max_depth is not None:
        settings.max_depth = parsed.max_depth
    if parsed.skip_invalid:
        settings.on_parse_error = "skip"
    if parsed.on_duplicate:
        settings.duplicates = parsed.on_duplicate

    dry_run = parsed.dry_run or parsed.check

    try:
        report = export_fragments(root, settings, dry_run=dry_run)
    except WriteError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.written:
            print("Files written before the failure:", file=sys.stderr)
            for path in e.written:
                print(f"  {path}", file=sys.stderr)
        return 1
    except FragmentExportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Generate output
    if parsed.format == "json":
        output = to_json(report, root)
    else:
        output = to_text(report, root, style="ascii" if parsed.ascii_style else "tree")

    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Report written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing report: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    if parsed.check and report.has_changes():
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
