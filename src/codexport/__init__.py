"""codexport: export source trees into a single normalized Markdown document.

The core is comment stripping that leaves string literals alone and a
Markdown normalizer that produces lint-compliant output.
"""

from codexport.cli import main
from codexport.comments import strip_comments
from codexport.markdown import disambiguate_headings, normalize_markdown
from codexport.models import ExportOptions, FileMetadata, Grammar, LexerState

__version__ = "0.1.0"
__all__ = [
    "main",
    "strip_comments",
    "normalize_markdown",
    "disambiguate_headings",
    "ExportOptions",
    "FileMetadata",
    "Grammar",
    "LexerState",
]
