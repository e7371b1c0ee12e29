# =============================================================================
# test_cli.py - wyst Command-Line Tests
# =============================================================================
# Exercises every subcommand through click's CliRunner.
# =============================================================================

import pytest
from click.testing import CliRunner

from wyst import __version__
from wyst.cli.errors import ExitCode, handle_cli_exception
from wyst.cli.main import main
from wyst.frontend.errors import ParserInvariantError, UnterminatedGroupError


SOURCE = """\
// Entry point
void main() { }
int counter
struct Point { }
"""


@pytest.fixture
def runner(monkeypatch):
    for name in ("WYST_JSON_MODE", "WYST_COLOR", "WYST_ENCODING"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "main.wy"
    path.write_text(SOURCE)
    return path


# =============================================================================
# Group Options
# =============================================================================

class TestMainGroup:
    """Top-level options."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("tokens", "ast", "symbols", "outline", "complete"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["ast", str(tmp_path / "missing.wy")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_debug_flag(self, runner, source_file):
        result = runner.invoke(main, ["--debug", "symbols", str(source_file)])
        assert result.exit_code == 0


# =============================================================================
# Subcommands
# =============================================================================

class TestTokensCommand:

    def test_lists_tokens(self, runner, source_file):
        result = runner.invoke(main, ["tokens", str(source_file)])
        assert result.exit_code == 0
        assert "Token(COMMENT, 'Entry point', 1:1)" in result.output
        assert "Token(IDENTIFIER, 'main', 2:6)" in result.output

    def test_verbose_total(self, runner, source_file):
        result = runner.invoke(main, ["tokens", "-v", str(source_file)])
        assert "Total: 10 tokens" in result.output


class TestAstCommand:

    def test_dump(self, runner, source_file):
        result = runner.invoke(main, ["ast", "--no-color", str(source_file)])
        assert result.exit_code == 0
        assert "VOID_FUNCTION_DECLARATION: [" in result.output
        assert "STRUCT_DECLARATION: [" in result.output
        assert "\x1b[" not in result.output

    def test_declarations_only(self, runner, source_file):
        result = runner.invoke(main, ["ast", "--no-color", "-d", str(source_file)])
        assert "OTHER" not in result.output
        assert result.output.count(": [") == 3

    def test_verbose_summary(self, runner, source_file):
        result = runner.invoke(main, ["ast", "--no-color", "-v", str(source_file)])
        assert "Tokenized: 10 tokens" in result.output
        assert "Parsed: 4 nodes, 3 declarations" in result.output

    def test_json_mode_flag(self, runner, tmp_path):
        path = tmp_path / "data.wy"
        path.write_text('"name" : "wyst"')
        result = runner.invoke(main, ["ast", "--no-color", "--json-mode", str(path)])
        assert "JSON: [" in result.output

    def test_json_mode_from_env(self, runner, tmp_path, monkeypatch):
        path = tmp_path / "data.wy"
        path.write_text('"name" : "wyst"')
        monkeypatch.setenv("WYST_JSON_MODE", "1")
        result = runner.invoke(main, ["ast", "--no-color", str(path)])
        assert "JSON: [" in result.output

    def test_flag_overrides_env(self, runner, tmp_path, monkeypatch):
        path = tmp_path / "data.wy"
        path.write_text('"name" : "wyst"')
        monkeypatch.setenv("WYST_JSON_MODE", "1")
        result = runner.invoke(main, ["ast", "--no-color", "--no-json-mode", str(path)])
        assert "JSON" not in result.output

    def test_syntax_error_exit_code(self, runner, tmp_path):
        path = tmp_path / "bad.wy"
        path.write_text("void main() {")
        result = runner.invoke(main, ["ast", str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "unterminated '{' group" in result.output


class TestSymbolsCommand:

    def test_table(self, runner, source_file):
        result = runner.invoke(main, ["symbols", str(source_file)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].split() == ["Kind", "Name", "Position"]
        assert lines[2].split() == ["function", "main", "2:6"]
        assert lines[3].split() == ["variable", "counter", "3:5"]
        assert lines[4].split() == ["struct", "Point", "4:8"]

    def test_verbose_shows_docs(self, runner, source_file):
        result = runner.invoke(main, ["symbols", "-v", str(source_file)])
        assert "    Entry point" in result.output
        assert "Total: 3 symbols" in result.output


class TestOutlineCommand:

    def test_outline(self, runner, source_file):
        result = runner.invoke(main, ["outline", str(source_file)])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "2:6  function  main  - Entry point"

    def test_no_declarations(self, runner, tmp_path):
        path = tmp_path / "empty.wy"
        path.write_text("// nothing here\n")
        result = runner.invoke(main, ["outline", str(path)])
        assert result.output.strip() == "No declarations found"


class TestCompleteCommand:

    def test_prefix(self, runner, source_file):
        result = runner.invoke(main, ["complete", str(source_file), "ma"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["main"]

    def test_all_names(self, runner, source_file):
        result = runner.invoke(main, ["complete", str(source_file)])
        assert result.output.splitlines() == ["Point", "counter", "main"]

    def test_verbose_details(self, runner, source_file):
        result = runner.invoke(main, ["complete", "-v", str(source_file), "main"])
        assert "function (line 2): Entry point" in result.output


# =============================================================================
# Error Handler
# =============================================================================

class TestHandleCliException:
    """Exceptions map to exit codes."""

    def test_syntax_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(UnterminatedGroupError("(", ")"))
        assert exc_info.value.code == ExitCode.BUILD_ERROR
        assert "unterminated '(' group" in capsys.readouterr().err

    def test_parser_invariant(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(ParserInvariantError("stuck", 3, 5))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
        assert "Internal error" in capsys.readouterr().err

    def test_file_not_found(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(FileNotFoundError("missing.wy"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_unexpected(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
