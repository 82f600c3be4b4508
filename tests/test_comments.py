"""Tests for comment stripping and grammar dispatch."""

from __future__ import annotations

import logging

import pytest

from codexport import comments
from codexport.comments import get_grammar, strip_comments
from codexport.lexers import strip_c_line, strip_lines
from codexport.models import Grammar, LexerState

# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class TestGrammarDispatch:
    @pytest.mark.parametrize(
        ("extension", "grammar"),
        [
            (".ps1", Grammar.POWERSHELL),
            (".cs", Grammar.C),
            (".CS", Grammar.C),
            (".html", Grammar.HTML),
            (".sql", Grammar.SQL),
            (".py", Grammar.PYTHON),
            (".yaml", Grammar.NONE),
            (".unknown", Grammar.C),
            ("", Grammar.C),
        ],
    )
    def test_get_grammar(self, extension: str, grammar: Grammar) -> None:
        assert get_grammar(extension) is grammar

    @pytest.mark.parametrize("extension", [".json", ".yml", ".yaml", ".md", ".toml", ".ini", ".cfg", ".conf"])
    def test_data_formats_pass_through(self, extension: str) -> None:
        content = 'url = "http://example.com" // # -- /* kept */\n'
        assert strip_comments(content, extension) == content

    def test_unknown_extension_uses_c_style(self) -> None:
        assert strip_comments("value // note", ".xyz") == "value"

    def test_lexer_failure_returns_original(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        def broken(line: str, state: LexerState) -> tuple[str, LexerState]:
            raise IndexError("scanner overran the line")

        monkeypatch.setitem(comments._LINE_LEXERS, Grammar.C, broken)
        content = "int a; // comment\n"
        with caplog.at_level(logging.WARNING, logger="codexport.comments"):
            assert strip_comments(content, ".c") == content
        assert "scanner overran the line" in caplog.text

    def test_crlf_input(self) -> None:
        assert strip_comments("a // x\r\nb\r\n", ".js") == "a\nb\n"


# ---------------------------------------------------------------------------
# PowerShell
# ---------------------------------------------------------------------------


class TestPowerShell:
    def test_string_literal_untouched(self) -> None:
        line = '$x = "# not a comment"'
        assert strip_comments(line, ".ps1") == line

    def test_trailing_comment(self) -> None:
        assert strip_comments("$x = 1   # set x", ".ps1") == "$x = 1"

    def test_full_line_comment_is_blank(self) -> None:
        assert strip_comments("# header\nGet-Item .", ".ps1") == "\nGet-Item ."

    def test_type_attribute_hash_kept(self) -> None:
        assert strip_comments("[#Requires]", ".ps1") == "[#Requires]"

    def test_escaped_quote_in_string(self) -> None:
        assert strip_comments('"say \\"#hi\\"" # c', ".ps1") == '"say \\"#hi\\""'

    def test_single_quoted_string(self) -> None:
        assert strip_comments("Write-Host '# kept' # dropped", ".ps1") == "Write-Host '# kept'"

    def test_block_comment_over_lines(self) -> None:
        content = "<#\n.SYNOPSIS\nHelp text\n#>\nGet-Item ."
        assert strip_comments(content, ".ps1") == "\n\n\n\nGet-Item ."

    def test_block_comment_closed_mid_line(self) -> None:
        content = "<# start\nend #> Get-Item ."
        assert strip_comments(content, ".ps1") == "\n Get-Item ."

    def test_inline_block_comment(self) -> None:
        assert strip_comments("Get-Item <# inline #> -Path x", ".ps1") == "Get-Item  -Path x"

    def test_block_state_does_not_leak_between_files(self) -> None:
        assert strip_comments("<# never closed", ".ps1") == ""
        assert strip_comments("Write-Host 'hi'", ".ps1") == "Write-Host 'hi'"


# ---------------------------------------------------------------------------
# C-style
# ---------------------------------------------------------------------------


class TestCStyle:
    def test_line_comment(self) -> None:
        assert strip_comments("int x = 1; // comment", ".cs") == "int x = 1;"

    def test_comment_markers_inside_strings(self) -> None:
        line = 'printf("// not /* a */ comment");'
        assert strip_comments(line, ".c") == line

    def test_escaped_char_literal(self) -> None:
        assert strip_comments("char c = '\\''; // quote", ".c") == "char c = '\\'';"

    def test_inline_block_comment(self) -> None:
        assert strip_comments("a /* b */ c", ".java") == "a  c"

    def test_block_comment_over_lines(self) -> None:
        content = "x = 1; /* start\nmiddle\nend */ y = 2;"
        assert strip_comments(content, ".js") == "x = 1;\n\n y = 2;"

    def test_unterminated_block_blanks_rest_of_file(self) -> None:
        content = "int a;\n/* open\nint b;\nint c;"
        assert strip_comments(content, ".cs") == "int a;\n\n\n"

    def test_state_threads_through_lines(self) -> None:
        text, state = strip_c_line("code(); /* open", LexerState())
        assert text == "code();"
        assert state.in_block
        text, state = strip_c_line("still comment */ more();", state)
        assert text == " more();"
        assert not state.in_block

    def test_strip_lines_starts_fresh(self) -> None:
        assert strip_lines("*/ kept", strip_c_line) == "*/ kept"


# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------


class TestSql:
    def test_dash_comment(self) -> None:
        assert strip_comments("SELECT 1; -- comment", ".sql") == "SELECT 1;"

    def test_dashes_in_string(self) -> None:
        line = "SELECT 'a -- b' FROM t"
        assert strip_comments(line, ".sql") == line

    def test_url_heuristic(self) -> None:
        line = "SELECT http://--x"
        assert strip_comments(line, ".sql") == line

    def test_block_comment(self) -> None:
        content = "/* header\n   more */\nSELECT 1;"
        assert strip_comments(content, ".sql") == "\n\nSELECT 1;"


# ---------------------------------------------------------------------------
# Python
# ---------------------------------------------------------------------------


class TestPython:
    def test_trailing_comment(self) -> None:
        assert strip_comments("x = 1  # set x", ".py") == "x = 1"

    def test_hash_in_string(self) -> None:
        line = "s = '# not a comment'"
        assert strip_comments(line, ".py") == line

    def test_escaped_quote(self) -> None:
        assert strip_comments('s = "a\\"#b"  # c', ".py") == 's = "a\\"#b"'

    def test_triple_quoted_string_suspends_comments(self) -> None:
        content = 'doc = """\n# inside the literal\n"""  # trailing'
        assert strip_comments(content, ".py") == 'doc = """\n# inside the literal\n"""'

    def test_single_quote_triple(self) -> None:
        content = "x = '''a\n# b'''  # c\ny = 2"
        assert strip_comments(content, ".py") == "x = '''a\n# b'''\ny = 2"

    def test_uncommented_lines_kept_verbatim(self) -> None:
        assert strip_comments("x = 1   ", ".py") == "x = 1   "


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


class TestHtml:
    def test_single_line_comment(self) -> None:
        assert strip_comments("<p>a</p><!-- note --><p>b</p>", ".html") == "<p>a</p><p>b</p>"

    def test_multi_line_comment_keeps_line_count(self) -> None:
        content = "<p>a</p>\n<!-- one\ntwo -->\n<p>b</p>"
        assert strip_comments(content, ".html") == "<p>a</p>\n\n\n<p>b</p>"

    def test_unterminated_comment(self) -> None:
        content = "<p>a</p>\n<!-- open\nrest"
        assert strip_comments(content, ".html") == "<p>a</p>\n\n"


# ---------------------------------------------------------------------------
# Line count
# ---------------------------------------------------------------------------

SAMPLE = """\
# header comment
<# block
still block #>
x = "string with # and // and -- and /* inside"
y = 'it''s' -- tail
/* open block
''' triple
close */ after // tail
\"\"\"doc
<!-- html
-->\"\"\" end # tail
-- done
"""


@pytest.mark.parametrize("extension", [".ps1", ".cs", ".sql", ".py", ".html", ".rb", ".xyz"])
def test_line_count_preserved(extension: str) -> None:
    stripped = strip_comments(SAMPLE, extension)
    assert len(stripped.split("\n")) == len(SAMPLE.split("\n"))
