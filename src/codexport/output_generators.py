"""Markdown document assembly and output."""

import pathlib
import re
import sys
from collections import defaultdict
from datetime import datetime

from tqdm import tqdm

from codexport.comments import strip_comments
from codexport.file_operations import (
    collect_files,
    exceeds_size_limit,
    find_project_root,
    get_combined_spec,
    process_file,
    read_source_file,
)
from codexport.markdown import disambiguate_headings, normalize_markdown
from codexport.models import ExportOptions, FileMetadata

BACKTICK_RUN_RE = re.compile(r"`+")


def generate_gfm_anchor(heading_text: str) -> str:
    """Generate a GitHub-Flavored Markdown anchor from heading text.

    Args:
        heading_text: The heading text (without # prefix)

    Returns:
        Anchor slug matching GFM behavior

    Examples:
        >>> generate_gfm_anchor("File: src/main.py")
        'file-srcmainpy'
    """
    slug = heading_text.replace("`", "").lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    return slug.strip("-")


def format_size(size_bytes: float) -> str:
    """Format file size in human-readable format, like "1.5 MB"."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} TB"


def file_heading(meta: FileMetadata) -> str:
    return f"File: `{meta.relative_path.as_posix()}`"


def generate_metadata_table(files_metadata: list[FileMetadata]) -> str:
    """Generate a markdown table with file metadata."""
    table = "| File | Size | Lines | Type | Category | Last Modified |\n"
    table += "|------|------|-------|------|----------|---------------|\n"

    for meta in files_metadata:
        modified_str = meta.modified.strftime("%Y-%m-%d %H:%M")
        table += (
            f"| `{meta.relative_path.as_posix()}` | {format_size(meta.size)} | {meta.lines} | "
            f"{meta.language} | {meta.category} | {modified_str} |\n"
        )

    return table


def generate_statistics(
    files_metadata: list[FileMetadata], skipped: list[FileMetadata] | None = None
) -> str:
    """Generate the statistics section, including files skipped for size."""
    total_lines = sum(m.lines for m in files_metadata)
    total_size = sum(m.size for m in files_metadata)

    by_category = defaultdict(list)
    by_language = defaultdict(list)
    for meta in files_metadata:
        by_category[meta.category].append(meta)
        by_language[meta.language].append(meta)

    stats = "## Statistics\n\n"
    stats += f"- **Total Files:** {len(files_metadata)}\n"
    stats += f"- **Total Lines of Code:** {total_lines:,}\n"
    stats += f"- **Total Size:** {format_size(total_size)}\n\n"

    stats += "### By Category\n\n"
    for category, metas in sorted(by_category.items(), key=lambda x: len(x[1]), reverse=True):
        stats += f"- **{category}:** {len(metas)} files, {sum(m.lines for m in metas):,} lines\n"

    stats += "\n### By Language\n\n"
    for language, metas in sorted(by_language.items(), key=lambda x: len(x[1]), reverse=True):
        stats += f"- **{language}:** {len(metas)} files, {sum(m.lines for m in metas):,} lines\n"

    if skipped:
        stats += "\n### Skipped Files\n\n"
        for meta in skipped:
            size = format_size(meta.size)
            stats += f"- `{meta.relative_path.as_posix()}` ({size}, over size limit)\n"

    return stats


def generate_directory_tree(root_name: str, relative_paths: list[pathlib.Path]) -> str:
    """Render the exported files as a fenced directory tree.

    Examples:
        >>> print(generate_directory_tree("app", [Path("src/a.py"), Path("b.md")]))
        ```text
        app/
        ├── src/
        │   └── a.py
        └── b.md
        ```
        <BLANKLINE>
    """
    tree: dict = {}
    for relative_path in relative_paths:
        node = tree
        for part in relative_path.parts:
            node = node.setdefault(part, {})

    lines = [f"{root_name}/"]

    def walk(node: dict, prefix: str) -> None:
        # Directories first, then files, each alphabetically
        entries = sorted(node.items(), key=lambda item: (not item[1], item[0].lower()))
        for index, (name, children) in enumerate(entries):
            last = index == len(entries) - 1
            connector = "└── " if last else "├── "
            lines.append(f"{prefix}{connector}{name}{'/' if children else ''}")
            if children:
                walk(children, prefix + ("    " if last else "│   "))

    walk(tree, "")
    return "```text\n" + "\n".join(lines) + "\n```\n"


def generate_table_of_contents(files_metadata: list[FileMetadata]) -> str:
    toc = ""
    for meta in files_metadata:
        anchor = generate_gfm_anchor(file_heading(meta))
        toc += f"- [`{meta.relative_path.as_posix()}`](#{anchor})\n"
    return toc


def number_lines(content: str) -> str:
    """Prefix every line with its right-aligned line number.

    Examples:
        >>> number_lines("a\\nb")
        '1 | a\\n2 | b'
    """
    lines = content.split("\n")
    width = len(str(len(lines)))
    return "\n".join(f"{number:>{width}} | {line}" for number, line in enumerate(lines, 1))


def choose_fence(content: str) -> str:
    """Pick a backtick fence longer than any backtick run in content."""
    longest = max((len(run) for run in BACKTICK_RUN_RE.findall(content)), default=0)
    return "`" * max(3, longest + 1)


def render_file_section(meta: FileMetadata, content: str, options: ExportOptions) -> str:
    """Render one file as a heading, a metadata line and a code block."""
    if options.strip_comments:
        content = strip_comments(content, meta.path.suffix)
    content = content.rstrip("\n")
    if options.line_numbers:
        content = number_lines(content)

    section = f"### {file_heading(meta)}\n\n"
    section += (
        f"**Language:** {meta.language} | **Size:** {format_size(meta.size)} | "
        f"**Lines:** {meta.lines} | **Category:** {meta.category}\n\n"
    )
    if meta.file_hash:
        section += f"**Hash (SHA-256):** `{meta.file_hash}`\n\n"

    fence = choose_fence(content)
    section += f"{fence}{meta.language}\n{content}\n{fence}\n\n---\n\n"
    return section


def build_document(
    start_path: pathlib.Path,
    files_metadata: list[FileMetadata],
    options: ExportOptions,
    skipped: list[FileMetadata] | None = None,
) -> str:
    """Assemble and normalize the Markdown export for one root directory."""
    parts = [
        f"# Code Summary: {start_path.name}\n\n",
        f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n",
        f"**Source Directory:** `{start_path}`\n\n",
        "---\n\n",
        generate_statistics(files_metadata, skipped),
        "\n---\n\n",
    ]

    if options.include_metadata_table:
        parts += ["## File Metadata\n\n", generate_metadata_table(files_metadata), "\n---\n\n"]

    if options.include_tree:
        relative_paths = [meta.relative_path for meta in files_metadata]
        parts += ["## Directory Tree\n\n", generate_directory_tree(start_path.name, relative_paths)]
        parts.append("\n---\n\n")

    if options.include_toc:
        parts += ["## Table of Contents\n\n", generate_table_of_contents(files_metadata)]
        parts.append("\n---\n\n")

    parts.append("## File Contents\n\n")
    with tqdm(
        total=len(files_metadata), desc="Writing", unit="file", disable=not options.verbose
    ) as pbar:
        for meta in files_metadata:
            try:
                content = read_source_file(meta.path)
            except OSError as e:
                print(f"Warning: Could not read {meta.relative_path}: {e}", file=sys.stderr)
            else:
                parts.append(render_file_section(meta, content, options))
            pbar.update(1)

    document = normalize_markdown("".join(parts))
    if options.unique_headings:
        document = disambiguate_headings(document)
    return document


def resolve_output_path(output_file: str, target_dir: str, multiple_roots: bool) -> pathlib.Path:
    """Name the output file; with several roots each gets its own suffix.

    Examples:
        >>> resolve_output_path("out/summary.md", "src/api", True).name
        'summary_api.md'
    """
    output_path = pathlib.Path(output_file)
    if multiple_roots:
        root_name = pathlib.Path(target_dir).resolve().name
        output_path = output_path.with_name(f"{output_path.stem}_{root_name}{output_path.suffix}")
    return output_path.resolve()


def create_markdown(
    target_dir: str, options: ExportOptions, output_path: pathlib.Path | None = None
) -> pathlib.Path:
    """Export one directory into a Markdown file.

    Args:
        target_dir: Directory to scan for code files
        options: Export settings
        output_path: Where to write; defaults to options.output_file

    Returns:
        Path of the written file
    """
    start_path = pathlib.Path(target_dir).resolve()
    if output_path is None:
        output_path = pathlib.Path(options.output_file).resolve()

    if not start_path.is_dir():
        print(f"Error: Directory not found: {target_dir}", file=sys.stderr)
        sys.exit(1)

    project_root = find_project_root(start_path)
    combined_spec = get_combined_spec(project_root)

    print(f"Scanning directory: {start_path}")
    print(f"Project root: {project_root}")

    file_paths = collect_files(start_path, project_root, combined_spec, excluded=(output_path,))
    print(f"Found {len(file_paths)} files to process")

    files_metadata: list[FileMetadata] = []
    skipped: list[FileMetadata] = []
    with tqdm(
        total=len(file_paths), desc="Processing", unit="file", disable=not options.verbose
    ) as pbar:
        for file_path in file_paths:
            pbar.update(1)
            meta = process_file(file_path, start_path, options.include_hash)
            if meta is None:
                continue
            if exceeds_size_limit(meta, options.max_file_size):
                print(
                    f"Warning: Skipping {meta.relative_path} ({format_size(meta.size)} over limit)",
                    file=sys.stderr,
                )
                skipped.append(meta)
            else:
                files_metadata.append(meta)
                if options.verbose:
                    print(f"  {meta.relative_path} ({meta.lines} lines, {format_size(meta.size)})")

    files_metadata.sort(key=lambda m: m.relative_path.as_posix())
    document = build_document(start_path, files_metadata, options, skipped)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document, encoding="utf-8")
    except OSError as e:
        print(f"Error: Could not write to {output_path}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Processed {len(files_metadata)} files, skipped {len(skipped)}")
    print(f"Total lines: {sum(m.lines for m in files_metadata):,}")
    print(f"Total size: {format_size(sum(m.size for m in files_metadata))}")
    print(f"Output: {output_path}")
    return output_path
