"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

from codexport.cli import build_parser, main, options_from_args


def _make_project(root: Path, source: str) -> Path:
    (root / ".git").mkdir(parents=True)
    (root / "script.ps1").write_text(source)
    return root


class TestArguments:
    def test_defaults(self) -> None:
        options = options_from_args(build_parser().parse_args(["src"]))
        assert options.output_file == "code_summary.md"
        assert not options.strip_comments
        assert options.include_tree
        assert options.include_toc
        assert options.max_file_size == 1024 * 1024

    def test_flags(self) -> None:
        args = build_parser().parse_args(
            ["a", "b", "--strip-comments", "--line-numbers", "--unique-headings", "--max-size", "0", "--no-tree"]
        )
        options = options_from_args(args)
        assert args.directories == ["a", "b"]
        assert options.strip_comments
        assert options.line_numbers
        assert options.unique_headings
        assert options.max_file_size == 0
        assert not options.include_tree


class TestMain:
    def test_single_directory(self, tmp_path: Path) -> None:
        project = _make_project(tmp_path / "proj", '$x = "# not a comment" # real comment\n')
        output = tmp_path / "export.md"

        main([str(project), "-o", str(output), "--strip-comments"])

        document = output.read_text(encoding="utf-8")
        assert '$x = "# not a comment"\n' in document
        assert "real comment" not in document

    def test_multiple_directories(self, tmp_path: Path) -> None:
        first = _make_project(tmp_path / "first", "Get-Item .\n")
        second = _make_project(tmp_path / "second", "Get-ChildItem .\n")
        output = tmp_path / "summary.md"

        main([str(first), str(second), "-o", str(output)])

        assert "Get-Item ." in (tmp_path / "summary_first.md").read_text(encoding="utf-8")
        assert "Get-ChildItem ." in (tmp_path / "summary_second.md").read_text(encoding="utf-8")
        assert not output.exists()

    def test_unique_headings(self, tmp_path: Path) -> None:
        project = _make_project(tmp_path / "proj", "Get-Item .\n")
        (project / "README.md").write_text("# Notes\n")
        output = tmp_path / "export.md"

        main([str(project), "-o", str(output), "--unique-headings"])

        document = output.read_text(encoding="utf-8")
        assert "### File: `README.md`" in document
        assert "```markdown\n# Notes\n```" in document
