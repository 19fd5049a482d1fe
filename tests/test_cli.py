# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Unit tests for cli.py."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from conftest import make_rdf

from xmptree import __version__
from xmptree.cli import (
    EXIT_FILE_NOT_FOUND,
    EXIT_GENERAL_ERROR,
    EXIT_PARSE_FAILED,
    EXIT_SUCCESS,
    main,
)


@pytest.fixture
def runner() -> CliRunner:
    """CLI Test Runner."""
    return CliRunner()


class TestCliHelp:
    """Tests for --help and --version."""

    def test_cli_help(self, runner: CliRunner) -> None:
        """--help returns exit code 0 and shows options."""
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "--keywords" in result.output
        assert "--find" in result.output
        assert "--render" in result.output
        assert "--quiet" in result.output

    def test_cli_version(self, runner: CliRunner) -> None:
        """--version shows the version."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_input_shows_help(self, runner: CliRunner) -> None:
        """Without INPUT the help is printed and exit code is 1."""
        result = runner.invoke(main, [])

        assert result.exit_code == EXIT_GENERAL_ERROR
        assert "Usage" in result.output


class TestCliRead:
    """Tests for reading XMP files."""

    def test_summary(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """Default output summarises the packet."""
        result = runner.invoke(main, [str(sample_xmp_file)])

        assert result.exit_code == EXIT_SUCCESS
        assert "sample.xmp" in result.output
        assert "Canon EOS 5D" in result.output
        assert "beach, sea" in result.output

    def test_quiet_summary(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """--quiet suppresses the summary."""
        result = runner.invoke(main, [str(sample_xmp_file), "--quiet"])

        assert result.exit_code == EXIT_SUCCESS
        assert result.output == ""

    def test_keywords(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """--keywords prints one keyword per line."""
        result = runner.invoke(main, [str(sample_xmp_file), "--keywords"])

        assert result.exit_code == EXIT_SUCCESS
        assert result.output.splitlines() == ["beach", "sea"]

    def test_make(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """--make prints tiff:Make."""
        result = runner.invoke(main, [str(sample_xmp_file), "--make"])

        assert result.exit_code == EXIT_SUCCESS
        assert result.output.strip() == "Canon"

    def test_find(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """--find prints scalar and array values."""
        result = runner.invoke(
            main,
            [str(sample_xmp_file), "--find", "xmp:Rating", "--find", "dc:creator"],
        )

        assert result.exit_code == EXIT_SUCCESS
        assert "xmp:Rating = 4" in result.output
        assert "dc:creator = Jane Doe, John Roe" in result.output

    def test_find_missing(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """A missing property warns and sets exit code 1."""
        result = runner.invoke(main, [str(sample_xmp_file), "--find", "dc:rights"])

        assert result.exit_code == EXIT_GENERAL_ERROR
        assert "Property not found: dc:rights" in result.output

    def test_find_unknown_prefix(
        self, runner: CliRunner, sample_xmp_file: Path
    ) -> None:
        """An unknown prefix is a usage error."""
        result = runner.invoke(main, [str(sample_xmp_file), "--find", "zz:thing"])

        assert result.exit_code != EXIT_SUCCESS
        assert "Unknown namespace prefix" in result.output

    def test_dump(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """--dump prints the node tree outline."""
        result = runner.invoke(main, [str(sample_xmp_file), "--dump"])

        assert result.exit_code == EXIT_SUCCESS
        assert "[Bag]" in result.output
        assert "'beach'" in result.output

    def test_render(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """--render prints the serialized document."""
        result = runner.invoke(main, [str(sample_xmp_file), "--render"])

        assert result.exit_code == EXIT_SUCCESS
        assert result.output.startswith("<x:xmpmeta")

    def test_packet(self, runner: CliRunner, sample_xmp_file: Path) -> None:
        """--packet wraps the rendered document."""
        result = runner.invoke(main, [str(sample_xmp_file), "--packet"])

        assert result.exit_code == EXIT_SUCCESS
        assert result.output.startswith("<?xpacket begin=")
        assert '<?xpacket end="w"?>' in result.output


class TestCliErrors:
    """Tests for error exit codes."""

    def test_file_not_found(self, runner: CliRunner, tmp_path: Path) -> None:
        """A missing file exits with code 2."""
        result = runner.invoke(main, [str(tmp_path / "missing.xmp")])

        assert result.exit_code == EXIT_FILE_NOT_FOUND
        assert "File not found" in result.output

    def test_parse_failure(self, runner: CliRunner, tmp_path: Path) -> None:
        """Invalid XMP exits with code 3 and names the problem."""
        path = tmp_path / "bad.xmp"
        path.write_text(
            make_rdf(
                '<rdf:Description rdf:about="a"/>'
                '<rdf:Description rdf:about="b"/>'
            ),
            encoding="utf-8",
        )
        result = runner.invoke(main, [str(path)])

        assert result.exit_code == EXIT_PARSE_FAILED
        assert "inconsistent rdf:about" in result.output

    def test_malformed_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """A file that is not XML exits with code 3."""
        path = tmp_path / "bad.xmp"
        path.write_bytes(b"\x00\x01 not xml")
        result = runner.invoke(main, [str(path)])

        assert result.exit_code == EXIT_PARSE_FAILED
