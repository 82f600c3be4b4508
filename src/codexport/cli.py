"""Command-line interface for codexport."""

import argparse
import logging

from codexport.constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_OUTPUT_FILE
from codexport.models import ExportOptions
from codexport.output_generators import create_markdown, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codexport",
        description="Export source trees into a single normalized Markdown document.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("directories", nargs="+", help="Directories to export, one document each.")
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_FILE,
        help="Output Markdown file; suffixed with the directory name when exporting several.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed processing information.",
    )
    parser.add_argument(
        "--strip-comments",
        action="store_true",
        help="Remove source comments (string literals are left alone).",
    )
    parser.add_argument(
        "--line-numbers",
        action="store_true",
        help="Prefix every code line with its line number.",
    )
    parser.add_argument(
        "--unique-headings",
        action="store_true",
        help="Append (n) to repeated heading texts.",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=DEFAULT_MAX_FILE_SIZE // 1024,
        help="Skip files larger than this many KB (0 for no limit).",
    )
    parser.add_argument("--no-tree", action="store_true", help="Skip the directory tree.")
    parser.add_argument("--no-toc", action="store_true", help="Skip the table of contents.")
    parser.add_argument(
        "--no-metadata-table",
        action="store_true",
        help="Skip generating the metadata table.",
    )
    parser.add_argument(
        "--include-hash",
        action="store_true",
        help="Include SHA-256 hash for each file (slower).",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> ExportOptions:
    return ExportOptions(
        output_file=args.output,
        verbose=args.verbose,
        include_metadata_table=not args.no_metadata_table,
        include_hash=args.include_hash,
        strip_comments=args.strip_comments,
        line_numbers=args.line_numbers,
        unique_headings=args.unique_headings,
        include_tree=not args.no_tree,
        include_toc=not args.no_toc,
        max_file_size=args.max_size * 1024,
    )


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the codexport CLI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = options_from_args(args)
    multiple_roots = len(args.directories) > 1
    for directory in args.directories:
        output_path = resolve_output_path(options.output_file, directory, multiple_roots)
        create_markdown(directory, options, output_path)


if __name__ == "__main__":
    main()
