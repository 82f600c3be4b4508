"""Comment stripping entry point: maps file extensions to grammars."""

import logging

from codexport.lexers import (
    strip_c_line,
    strip_html,
    strip_lines,
    strip_powershell_line,
    strip_python_line,
    strip_sql_line,
)
from codexport.models import Grammar

logger = logging.getLogger(__name__)

EXTENSION_GRAMMARS: dict[str, Grammar] = {
    # PowerShell
    ".ps1": Grammar.POWERSHELL,
    ".psm1": Grammar.POWERSHELL,
    ".psd1": Grammar.POWERSHELL,
    # C-style
    ".c": Grammar.C,
    ".h": Grammar.C,
    ".cpp": Grammar.C,
    ".hpp": Grammar.C,
    ".cc": Grammar.C,
    ".cxx": Grammar.C,
    ".hxx": Grammar.C,
    ".cs": Grammar.C,
    ".java": Grammar.C,
    ".js": Grammar.C,
    ".mjs": Grammar.C,
    ".cjs": Grammar.C,
    ".jsx": Grammar.C,
    ".ts": Grammar.C,
    ".tsx": Grammar.C,
    ".go": Grammar.C,
    ".rs": Grammar.C,
    ".swift": Grammar.C,
    ".kt": Grammar.C,
    ".kts": Grammar.C,
    ".dart": Grammar.C,
    ".php": Grammar.C,
    ".rb": Grammar.C,
    ".css": Grammar.C,
    ".scss": Grammar.C,
    ".less": Grammar.C,
    ".scala": Grammar.C,
    ".groovy": Grammar.C,
    # HTML-style
    ".html": Grammar.HTML,
    ".htm": Grammar.HTML,
    ".xml": Grammar.HTML,
    ".xaml": Grammar.HTML,
    ".svg": Grammar.HTML,
    ".vue": Grammar.HTML,
    # SQL
    ".sql": Grammar.SQL,
    ".psql": Grammar.SQL,
    ".mysql": Grammar.SQL,
    # Python
    ".py": Grammar.PYTHON,
    ".pyw": Grammar.PYTHON,
    ".pyi": Grammar.PYTHON,
    # Data formats without comment syntax
    ".json": Grammar.NONE,
    ".yml": Grammar.NONE,
    ".yaml": Grammar.NONE,
    ".md": Grammar.NONE,
    ".markdown": Grammar.NONE,
    ".toml": Grammar.NONE,
    ".ini": Grammar.NONE,
    ".cfg": Grammar.NONE,
    ".conf": Grammar.NONE,
    ".txt": Grammar.NONE,
    ".csv": Grammar.NONE,
    ".rst": Grammar.NONE,
}

# Unknown extensions are stripped as C-style
DEFAULT_GRAMMAR = Grammar.C

_LINE_LEXERS = {
    Grammar.POWERSHELL: strip_powershell_line,
    Grammar.C: strip_c_line,
    Grammar.SQL: strip_sql_line,
    Grammar.PYTHON: strip_python_line,
}


def get_grammar(extension: str) -> Grammar:
    """Look up the comment grammar for a file extension.

    Args:
        extension: Extension including the leading dot, any case

    Returns:
        The mapped Grammar, or DEFAULT_GRAMMAR for unknown extensions

    Examples:
        >>> get_grammar(".PS1")
        <Grammar.POWERSHELL: 'powershell'>
    """
    return EXTENSION_GRAMMARS.get(extension.lower(), DEFAULT_GRAMMAR)


def strip_comments(content: str, extension: str) -> str:
    """Strip comments from one file's content.

    Never raises: if a lexer fails, a warning is logged and the original
    content is returned unchanged.

    Args:
        content: Complete text of one file
        extension: File extension including the leading dot (e.g. ".cs")

    Returns:
        Content with comments removed. Line count is preserved for every
        grammar.
    """
    grammar = get_grammar(extension)
    if grammar is Grammar.NONE:
        return content

    try:
        text = content.replace("\r\n", "\n")
        if grammar is Grammar.HTML:
            return strip_html(text)
        return strip_lines(text, _LINE_LEXERS[grammar])
    except Exception as e:
        logger.warning(
            "Comment stripping failed for %s content, keeping original: %s", extension, e
        )
        return content
