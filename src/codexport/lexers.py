"""Comment strippers for the supported comment grammars.

Each line lexer has the shape ``(line, state) -> (line, state)``: it returns
the line with its comments blanked and the :class:`LexerState` to carry into
the next line of the same file. Characters inside an open string literal are
never treated as comment syntax. Only the HTML stripper works on the whole
document at once.

The scanners are heuristic. String escaping follows a simplified backslash
model, and nothing here understands nested expressions or preprocessor
directives.
"""

import re
from collections.abc import Callable
from dataclasses import replace

from codexport.models import LexerState

LineLexer = Callable[[str, LexerState], tuple[str, LexerState]]

_QUOTES = "\"'"
_TRIPLE_QUOTES = ('"""', "'''")

_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_HTML_UNTERMINATED_RE = re.compile(r"<!--.*\Z", re.DOTALL)


def strip_lines(content: str, line_lexer: LineLexer) -> str:
    """Run a line lexer over every line of one file.

    The state starts fresh for each call, so nothing leaks between files.
    """
    state = LexerState()
    stripped = []
    for line in content.split("\n"):
        text, state = line_lexer(line, state)
        stripped.append(text)
    return "\n".join(stripped)


def strip_powershell_line(line: str, state: LexerState) -> tuple[str, LexerState]:
    """Strip ``#`` and ``<# ... #>`` comments from a PowerShell line.

    A ``#`` right after ``[`` is kept so type attributes survive.
    """
    rest = line
    if state.in_block:
        end = line.find("#>")
        if end == -1:
            return "", state
        rest = line[end + 2 :]
        state = replace(state, in_block=False)

    out: list[str] = []
    quote = None
    i = 0
    n = len(rest)
    while i < n:
        ch = rest[i]
        if quote:
            out.append(ch)
            # Single-quoted PowerShell strings are verbatim
            if ch == "\\" and quote == '"' and i + 1 < n:
                out.append(rest[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue
        if ch in _QUOTES:
            quote = ch
            out.append(ch)
            i += 1
            continue
        if rest.startswith("<#", i):
            end = rest.find("#>", i + 2)
            if end == -1:
                return "".join(out).rstrip(), replace(state, in_block=True)
            i = end + 2
            continue
        if ch == "#" and (i == 0 or rest[i - 1] != "["):
            break
        out.append(ch)
        i += 1

    return "".join(out).rstrip(), state


def _strip_block_comment_line(
    line: str, state: LexerState, is_line_comment: Callable[[str, int], bool]
) -> tuple[str, LexerState]:
    """Scan a line of a grammar with ``/* ... */`` block comments.

    Args:
        line: The source line
        state: State carried from the previous line
        is_line_comment: Tells whether a single-line comment starts at an index

    Returns:
        The surviving text (right-trimmed) and the state for the next line
    """
    out: list[str] = []
    in_block = state.in_block
    quote = None
    i = 0
    n = len(line)
    while i < n:
        if in_block:
            end = line.find("*/", i)
            if end == -1:
                break
            in_block = False
            i = end + 2
            continue

        ch = line[i]
        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(line[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue
        if ch in _QUOTES:
            quote = ch
            out.append(ch)
            i += 1
            continue
        if line.startswith("/*", i):
            in_block = True
            i += 2
            continue
        if is_line_comment(line, i):
            break
        out.append(ch)
        i += 1

    return "".join(out).rstrip(), replace(state, in_block=in_block)


def _is_c_line_comment(line: str, index: int) -> bool:
    return line.startswith("//", index)


def _is_sql_line_comment(line: str, index: int) -> bool:
    # "https://--" style text is not a comment
    return line.startswith("--", index) and not line.endswith("://", 0, index)


def strip_c_line(line: str, state: LexerState) -> tuple[str, LexerState]:
    """Strip ``//`` and ``/* ... */`` comments from a C-style line."""
    return _strip_block_comment_line(line, state, _is_c_line_comment)


def strip_sql_line(line: str, state: LexerState) -> tuple[str, LexerState]:
    """Strip ``--`` and ``/* ... */`` comments from a SQL line."""
    return _strip_block_comment_line(line, state, _is_sql_line_comment)


def strip_python_line(line: str, state: LexerState) -> tuple[str, LexerState]:
    """Strip ``#`` comments from a Python line.

    Triple-quoted literals may span lines; their delimiter is kept in
    ``state.quote`` until the closing delimiter shows up. Lines without a
    comment come back verbatim so multi-line literal text is untouched.
    """
    out: list[str] = []
    triple = state.quote
    quote = None
    truncated = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if triple:
            if ch == "\\":
                out.append(line[i : i + 2])
                i += 2
            elif line.startswith(triple, i):
                out.append(triple)
                i += 3
                triple = None
            else:
                out.append(ch)
                i += 1
            continue
        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(line[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue
        if line.startswith(_TRIPLE_QUOTES, i):
            triple = line[i : i + 3]
            out.append(triple)
            i += 3
            continue
        if ch in _QUOTES:
            quote = ch
            out.append(ch)
            i += 1
            continue
        if ch == "#":
            truncated = True
            break
        out.append(ch)
        i += 1

    text = "".join(out)
    if truncated:
        text = text.rstrip()
    return text, replace(state, quote=triple)


def strip_html(content: str) -> str:
    """Remove ``<!-- ... -->`` comments from a whole document.

    Every removed span is replaced by the newlines it contained, so the line
    count does not change. An unterminated comment runs to end of file.
    """

    def _keep_newlines(match: re.Match) -> str:
        return "\n" * match.group().count("\n")

    content = _HTML_COMMENT_RE.sub(_keep_newlines, content)
    return _HTML_UNTERMINATED_RE.sub(_keep_newlines, content)
