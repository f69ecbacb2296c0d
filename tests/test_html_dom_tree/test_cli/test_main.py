"""Tests for the command-line interface."""

import json
import logging

import pytest

from html_dom_tree import __version__
from html_dom_tree.cli.main import (
    EXIT_FAILURE,
    EXIT_OK,
    create_argument_parser,
    main,
)

DOCUMENT = "<p>\nthe cat sat\n</p>\n"
TABLE = "<table>\n<tr>\n<td>\nx\n</td>\n</tr>\n</table>\n"


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Drop the handler main() installs so later tests do not write to it."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "doc.html"
    path.write_text(DOCUMENT, encoding="utf-8")
    return path


@pytest.fixture
def table(tmp_path):
    path = tmp_path / "table.html"
    path.write_text(TABLE, encoding="utf-8")
    return path


class TestArgumentParser:
    """Test argument parsing."""

    def test_subcommands(self) -> None:
        """Each edit is a subcommand with its own arguments."""
        parser = create_argument_parser()

        args = parser.parse_args(["add", "doc.html", "cat", "b", "--report"])

        assert args.command == "add"
        assert args.word == "cat"
        assert args.tag == "b"
        assert args.report

    def test_bold_row_requires_integer(self, capsys) -> None:
        """Row numbers are parsed as integers."""
        parser = create_argument_parser()

        with pytest.raises(SystemExit):
            parser.parse_args(["bold-row", "doc.html", "first"])

    def test_version(self, capsys) -> None:
        """--version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    """Test running commands end to end."""

    def test_no_command(self, capsys) -> None:
        """Running without a command prints help and fails."""
        assert main([]) == EXIT_FAILURE
        assert "usage:" in capsys.readouterr().out

    def test_show(self, document, capsys) -> None:
        """show prints the document unchanged."""
        assert main(["show", str(document)]) == EXIT_OK
        assert capsys.readouterr().out == DOCUMENT

    def test_show_tree(self, document, capsys) -> None:
        """show --tree prints the outline."""
        assert main(["show", str(document), "--tree"]) == EXIT_OK
        assert capsys.readouterr().out == "      p\n      |---- the cat sat\n"

    def test_replace(self, document, capsys) -> None:
        """replace renames tags."""
        assert main(["replace", str(document), "p", "div"]) == EXIT_OK
        assert capsys.readouterr().out == "<div>\nthe cat sat\n</div>\n"

    def test_bold_row(self, table, capsys) -> None:
        """bold-row boldfaces the row's columns."""
        assert main(["bold-row", str(table), "1"]) == EXIT_OK
        assert "<td>\n<b>\nx\n</b>\n</td>" in capsys.readouterr().out

    def test_remove(self, table, capsys) -> None:
        """remove unwraps elements."""
        assert main(["remove", str(table), "tr"]) == EXIT_OK
        assert capsys.readouterr().out == "<table>\n<td>\nx\n</td>\n</table>\n"

    def test_add(self, document, capsys) -> None:
        """add wraps matching words."""
        assert main(["add", str(document), "cat", "em"]) == EXIT_OK
        assert capsys.readouterr().out == (
            "<p>\nthe \n<em>\ncat\n</em>\n sat\n</p>\n"
        )

    def test_output_file(self, document, tmp_path, capsys) -> None:
        """--output writes the result to a file."""
        output = tmp_path / "out.html"

        assert main(["add", str(document), "cat", "b", "-o", str(output)]) == EXIT_OK

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Output written to" in captured.err
        assert output.read_text(encoding="utf-8") == (
            "<p>\nthe \n<b>\ncat\n</b>\n sat\n</p>\n"
        )

    def test_report(self, document, capsys) -> None:
        """--report prints the edit result as JSON on stderr."""
        assert main(["remove", str(document), "p", "--report"]) == EXIT_OK

        report = json.loads(capsys.readouterr().err)
        assert report["operation"] == "remove_tag"
        assert report["arguments"] == {"tag": "p"}
        assert report["changes"] == 1
        assert report["changed"] is True

    def test_config_file(self, table, tmp_path, capsys) -> None:
        """Tag names can come from a configuration file."""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"tree": {"bold_tag": "strong"}}),
                          encoding="utf-8")

        assert main(["--config", str(config), "bold-row", str(table), "1"]) == EXIT_OK
        assert "<strong>\nx\n</strong>" in capsys.readouterr().out

    def test_invalid_config_file(self, document, tmp_path, capsys) -> None:
        """A bad configuration file is reported and fails."""
        config = tmp_path / "config.json"
        config.write_text("{broken", encoding="utf-8")

        assert main(["-c", str(config), "show", str(document)]) == EXIT_FAILURE
        assert "Error:" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys) -> None:
        """A missing document is reported and fails."""
        missing = tmp_path / "missing.html"

        assert main(["-q", "show", str(missing)]) == EXIT_FAILURE
        assert "Error:" in capsys.readouterr().err

    def test_empty_tag_argument_is_noop(self, document, capsys) -> None:
        """An empty tag name leaves the document unchanged."""
        assert main(["add", str(document), "cat", "", "--report"]) == EXIT_OK

        captured = capsys.readouterr()
        assert captured.out == DOCUMENT
        report = json.loads(captured.err)
        assert report["changes"] == 0
        assert report["diagnostics"][0]["message"] == "Empty tag - nothing to wrap with"

    def test_unencodable_output(self, tmp_path, capsys) -> None:
        """Text the output encoding cannot hold is reported and fails."""
        source = tmp_path / "cafe.html"
        source.write_text("<p>\ncaf\u00e9\n</p>\n", encoding="utf-8")
        output = tmp_path / "out.html"

        assert main(["-q", "show", str(source), "-o", str(output),
                     "--encoding", "ascii"]) == EXIT_FAILURE
        assert "Error:" in capsys.readouterr().err
