"""Markdown post-processing for assembled exports.

``normalize_markdown`` rewrites a document into a canonical, lint-friendly
form through a fixed sequence of passes. Each pass is applied on its own: if
one fails, it is skipped with a warning and the output of the earlier passes
carries on. Running the normalizer on its own output changes nothing.

Lines inside code fences are never treated as headings.
"""

import logging
import re

from codexport.constants import DEFAULT_TITLE, MAX_CODE_LINE_LENGTH, TAB_WIDTH, WRAP_WIDTH

logger = logging.getLogger(__name__)

FENCE_OPEN_RE = re.compile(r"^(`{3,}|~{3,})(.*)$")
FENCE_LIKE_RE = re.compile(r"^\s*(`{3}|~{3})")
HEADING_LINE_RE = re.compile(r"^#")
HEADING_RE = re.compile(r"^(#+)\s+(.*?)\s*$")
H1_RE = re.compile(r"^#\s")
MISSING_SPACE_RE = re.compile(r"^(#+)(?=[^#\s])")
BLANK_RUN_RE = re.compile(r"\n{3,}")


def fence_mask(lines: list[str]) -> list[bool]:
    """Flag the lines that sit inside a fenced code block.

    Fences open with three or more backticks or tildes; marker lines
    themselves are not flagged. A fence closes on a line made only of at
    least as many of the same character as opened it; an unclosed fence runs
    to the end of the document.
    """
    mask = []
    fence = None
    for line in lines:
        if fence is None:
            match = FENCE_OPEN_RE.match(line)
            # Backtick info strings cannot contain backticks
            if match and not (match.group(1)[0] == "`" and "`" in match.group(2)):
                fence = match.group(1)
            mask.append(False)
            continue
        stripped = line.rstrip()
        if len(stripped) >= len(fence) and stripped == fence[0] * len(stripped):
            fence = None
            mask.append(False)
        else:
            mask.append(True)
    return mask


def _is_heading(line: str, in_fence: bool) -> bool:
    return not in_fence and bool(HEADING_LINE_RE.match(line))


def clean_whitespace(content: str) -> str:
    """Expand tabs and trim trailing whitespace on every line."""
    return "\n".join(
        line.replace("\t", " " * TAB_WIDTH).rstrip() for line in content.split("\n")
    )


def space_headings(content: str) -> str:
    """Surround heading lines with a blank line.

    No blank line is added before the first line, after the last line, or
    between a heading and a heading that directly follows it.
    """
    lines = content.split("\n")
    mask = fence_mask(lines)
    last = len(lines) - 1
    spaced: list[str] = []

    for idx, line in enumerate(lines):
        heading = _is_heading(line, mask[idx])
        if heading and spaced and spaced[-1] != "":
            spaced.append("")
        spaced.append(line)
        if heading and idx < last:
            next_line = lines[idx + 1]
            if next_line != "" and not _is_heading(next_line, mask[idx + 1]):
                spaced.append("")

    return "\n".join(spaced)


def collapse_blank_lines(content: str) -> str:
    """Allow at most one blank line between content lines."""
    return BLANK_RUN_RE.sub("\n\n", content)


def fix_heading_markers(content: str) -> str:
    """Rewrite ``##Text`` headings as ``## Text``."""
    lines = content.split("\n")
    mask = fence_mask(lines)
    return "\n".join(
        line if in_fence else MISSING_SPACE_RE.sub(r"\1 ", line, count=1)
        for line, in_fence in zip(lines, mask)
    )


def ensure_title(content: str) -> str:
    """Start the document with a top-level heading.

    Leading blank lines are dropped. If the first line is not an H1, a
    synthetic title is prepended.
    """
    body = content.lstrip("\n")
    first_line = body.split("\n", 1)[0]
    if H1_RE.match(first_line):
        return body
    return f"# {DEFAULT_TITLE}\n\n" + body


def wrap_line(line: str, width: int = WRAP_WIDTH) -> list[str]:
    """Soft-wrap a line at word boundaries.

    Segments keep the line's indentation and hold at most ``width``
    characters, except when a single word is longer than that; words are
    never split.

    Examples:
        >>> wrap_line("  aaa bbb ccc", width=9)
        ['  aaa bbb', '  ccc']
    """
    indent = line[: len(line) - len(line.lstrip(" "))]
    segments = []
    current = ""
    for word in line.split():
        if not current:
            current = indent + word
        elif len(current) + 1 + len(word) <= width:
            current = f"{current} {word}"
        else:
            segments.append(current)
            current = indent + word
    segments.append(current)
    return segments


def wrap_code_lines(content: str) -> str:
    """Wrap over-long lines inside code fences; other lines are untouched.

    A line is left whole when wrapping would start a segment with a fence
    marker.
    """
    lines = content.split("\n")
    mask = fence_mask(lines)
    wrapped: list[str] = []
    for line, in_fence in zip(lines, mask):
        if in_fence and len(line) > MAX_CODE_LINE_LENGTH:
            segments = wrap_line(line)
            # A segment that looks like a fence marker would end the block on re-reading
            if any(FENCE_LIKE_RE.match(segment) for segment in segments):
                wrapped.append(line)
            else:
                wrapped.extend(segments)
        else:
            wrapped.append(line)
    return "\n".join(wrapped)


def ensure_trailing_newline(content: str) -> str:
    """End the document with exactly one newline."""
    return content.rstrip() + "\n"


NORMALIZATION_PASSES = (
    clean_whitespace,
    space_headings,
    collapse_blank_lines,
    fix_heading_markers,
    ensure_title,
    wrap_code_lines,
    ensure_trailing_newline,
)


def _apply_pass(markdown_pass, content: str) -> str:
    try:
        return markdown_pass(content)
    except Exception as e:
        logger.warning(
            "Markdown pass %s failed, leaving content as is: %s", markdown_pass.__name__, e
        )
        return content


def normalize_markdown(content: str) -> str:
    """Rewrite an assembled document into canonical Markdown.

    Args:
        content: The complete assembled document

    Returns:
        The normalized document. Never raises.
    """
    for markdown_pass in NORMALIZATION_PASSES:
        content = _apply_pass(markdown_pass, content)
    return content


def disambiguate_headings(content: str) -> str:
    """Append ``(n)`` to repeated heading texts.

    Headings are compared by text only, whatever their level. The first
    occurrence is kept; later ones become ``<markers> <text> (<n>)``, with
    n skipped forward past texts already used in the document.
    Never raises: on failure the content comes back unchanged.

    Examples:
        >>> disambiguate_headings("## Intro\\n\\n## Intro\\n")
        '## Intro\\n\\n## Intro (1)\\n'
    """
    try:
        lines = content.split("\n")
        mask = fence_mask(lines)
        seen: dict[str, int] = {}
        for idx, line in enumerate(lines):
            if mask[idx]:
                continue
            match = HEADING_RE.match(line)
            if not match:
                continue
            markers, text = match.groups()
            if text not in seen:
                seen[text] = 0
                continue
            seen[text] += 1
            renamed = f"{text} ({seen[text]})"
            while renamed in seen:
                seen[text] += 1
                renamed = f"{text} ({seen[text]})"
            seen[renamed] = 0
            lines[idx] = f"{markers} {renamed}"
        return "\n".join(lines)
    except Exception as e:
        logger.warning("Heading disambiguation failed, leaving content as is: %s", e)
        return content
