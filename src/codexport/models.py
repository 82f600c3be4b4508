"""Data models for codexport."""

import pathlib
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from codexport.constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_OUTPUT_FILE


class Grammar(Enum):
    """Comment-syntax family used to strip a file."""

    POWERSHELL = "powershell"
    C = "c"
    HTML = "html"
    SQL = "sql"
    PYTHON = "python"
    NONE = "none"


@dataclass(frozen=True)
class LexerState:
    """Scanner state carried from one line of a file to the next.

    Attributes:
        in_block: A multi-line comment is open
        quote: Delimiter of an open multi-line string literal, if any
    """

    in_block: bool = False
    quote: str | None = None


@dataclass
class FileMetadata:
    """Metadata for a single file.

    Attributes:
        path: Absolute path to the file
        relative_path: Path relative to the scan root
        language: Detected programming language
        size: File size in bytes
        lines: Number of lines in the file
        modified: Last modification timestamp (local time, no timezone)
        category: File category (source, config, etc.)
        file_hash: Optional SHA-256 hash of file contents
    """

    path: pathlib.Path
    relative_path: pathlib.Path
    language: str
    size: int
    lines: int
    modified: datetime
    category: str
    file_hash: str | None = None


@dataclass
class ExportOptions:
    """Settings for one export run."""

    output_file: str = DEFAULT_OUTPUT_FILE
    verbose: bool = False
    include_metadata_table: bool = True
    include_hash: bool = False
    strip_comments: bool = False
    line_numbers: bool = False
    unique_headings: bool = False
    include_tree: bool = True
    include_toc: bool = True
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
