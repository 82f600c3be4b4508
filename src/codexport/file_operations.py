"""File system operations: project discovery, ignore rules and file loading."""

import hashlib
import os
import pathlib
import sys
from datetime import datetime

import pathspec

from codexport.constants import ALWAYS_IGNORE_PATTERNS
from codexport.language_detection import get_file_category, get_language_from_path
from codexport.models import FileMetadata

# (directory holding the patterns, spec matched relative to that directory)
IgnoreLayer = tuple[pathlib.Path, pathspec.GitIgnoreSpec]


def count_lines(file_path: pathlib.Path) -> int:
    """Count lines in a file, or return 0 if it cannot be read."""
    try:
        with open(file_path, "rb") as f:
            return sum(1 for _ in f)
    except OSError:
        return 0


def get_file_hash(file_path: pathlib.Path, hash_files: bool = False) -> str | None:
    """Get SHA-256 hash of a file.

    Args:
        file_path: Path to the file
        hash_files: Whether to compute the hash at all

    Returns:
        Hex digest if hash_files is True and the file is readable, None otherwise
    """
    if not hash_files:
        return None
    try:
        hash_sha256 = hashlib.sha256()
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(4096), b""):
                hash_sha256.update(chunk)
        return hash_sha256.hexdigest()
    except OSError:
        return None


def process_file(
    file_path: pathlib.Path, start_path: pathlib.Path, include_hash: bool = False
) -> FileMetadata | None:
    """Build the metadata record for one file.

    Returns:
        FileMetadata, or None if the file has no known language or cannot be stat'ed
    """
    try:
        lang = get_language_from_path(file_path)
        if lang is None:
            return None

        stat = file_path.stat()
        return FileMetadata(
            path=file_path,
            relative_path=file_path.relative_to(start_path),
            language=lang,
            size=stat.st_size,
            lines=count_lines(file_path),
            modified=datetime.fromtimestamp(stat.st_mtime),
            category=get_file_category(file_path),
            file_hash=get_file_hash(file_path, include_hash),
        )
    except (OSError, ValueError) as e:
        print(f"Warning: Error processing {file_path}: {e}", file=sys.stderr)
        return None


def exceeds_size_limit(meta: FileMetadata, max_file_size: int) -> bool:
    """Tell whether a file is over the size limit (0 means no limit)."""
    return max_file_size > 0 and meta.size > max_file_size


def read_source_file(file_path: pathlib.Path) -> str:
    """Read a file as UTF-8, dropping undecodable bytes.

    Raises:
        OSError: If the file cannot be opened
    """
    with open(file_path, encoding="utf-8", errors="ignore") as f:
        return f.read()


def find_project_root(start_dir: pathlib.Path) -> pathlib.Path:
    """Find the nearest parent directory containing .git, or return start_dir."""
    current = start_dir.resolve()
    while True:
        if (current / ".git").is_dir():
            return current
        parent = current.parent
        if parent == current:
            print(
                "Warning: .git directory not found. Using starting directory as project root.",
                file=sys.stderr,
            )
            return start_dir.resolve()
        current = parent


def _read_pattern_file(path: pathlib.Path) -> list[str]:
    try:
        with open(path, encoding="utf-8", errors="ignore") as f:
            return f.readlines()
    except OSError as e:
        print(f"Warning: Could not read {path}: {e}", file=sys.stderr)
        return []


def get_combined_spec(root_dir: pathlib.Path) -> pathspec.GitIgnoreSpec:
    """Combine ALWAYS_IGNORE_PATTERNS with the project's git ignore files.

    Reads the root .gitignore and .git/info/exclude when present.
    """
    all_patterns = list(ALWAYS_IGNORE_PATTERNS)

    for pattern_file in (root_dir / ".gitignore", root_dir / ".git" / "info" / "exclude"):
        if pattern_file.is_file():
            all_patterns.extend(_read_pattern_file(pattern_file))

    return pathspec.GitIgnoreSpec.from_lines(all_patterns)


def load_nested_gitignore(directory: pathlib.Path) -> list[str]:
    """Load .gitignore patterns from one directory, or [] if there is none."""
    gitignore_path = directory / ".gitignore"
    if gitignore_path.is_file():
        return _read_pattern_file(gitignore_path)
    return []


def _relative_posix(path: pathlib.Path, root: pathlib.Path) -> str | None:
    try:
        return str(path.relative_to(root)).replace(os.sep, "/")
    except ValueError:
        return None


def _nested_layer(directory: pathlib.Path) -> list[IgnoreLayer]:
    patterns = load_nested_gitignore(directory)
    if not patterns:
        return []
    return [(directory, pathspec.GitIgnoreSpec.from_lines(patterns))]


def is_ignored(path: pathlib.Path, layers: list[IgnoreLayer], is_dir: bool = False) -> bool:
    """Tell whether any ignore layer matches path.

    Each layer's patterns are matched against the path relative to the
    directory that holds them, so anchored ``/pattern`` lines work in nested
    .gitignore files.
    """
    for base, spec in layers:
        relative = _relative_posix(path, base)
        if relative is None:
            continue
        # Trailing slash matches directory patterns like "node_modules/"
        if is_dir:
            relative += "/"
        if spec.match_file(relative):
            return True
    return False


def collect_files(
    start_path: pathlib.Path,
    project_root: pathlib.Path,
    combined_spec: pathspec.GitIgnoreSpec,
    excluded: tuple[pathlib.Path, ...] = (),
) -> list[pathlib.Path]:
    """Collect the files to export under start_path.

    Nested .gitignore files apply to their own directory and everything
    below it, including those between project_root and start_path.

    Args:
        start_path: Directory to start scanning from
        project_root: Project root that combined_spec is relative to
        combined_spec: Spec with the root ignore patterns
        excluded: Paths never to export (e.g. the output file itself)

    Returns:
        Sorted list of file paths with a known language
    """
    excluded_resolved = {p.resolve() for p in excluded}
    files_to_process = []

    base_layers: list[IgnoreLayer] = [(project_root, combined_spec)]
    inner_parts = pathlib.PurePath(_relative_posix(start_path, project_root) or ".").parts
    for depth in range(1, len(inner_parts)):
        base_layers += _nested_layer(project_root.joinpath(*inner_parts[:depth]))

    layers_by_dir = {start_path: base_layers}

    for root, dirs, files in os.walk(start_path, topdown=True):
        root_path = pathlib.Path(root)
        layers = layers_by_dir.pop(root_path, base_layers)
        if root_path != project_root:
            layers = layers + _nested_layer(root_path)

        for d in list(dirs):
            dir_path = root_path / d
            if is_ignored(dir_path, layers, is_dir=True):
                dirs.remove(d)
            else:
                layers_by_dir[dir_path] = layers
        dirs.sort()

        for filename in sorted(files):
            file_path = root_path / filename
            if file_path.resolve() in excluded_resolved:
                continue
            if is_ignored(file_path, layers):
                continue
            if get_language_from_path(file_path) is not None:
                files_to_process.append(file_path)

    return files_to_process
