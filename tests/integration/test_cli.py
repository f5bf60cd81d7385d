"""Integration tests for the ucvt command line."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from ucvt.cli import main
from ucvt.cli.exit_codes import ExitCode
from ucvt.exceptions import CaseFoldingFetchError

CASEFOLDING_SAMPLE = """\
# CaseFolding-14.0.0.txt
0041; C; 0061; # LATIN CAPITAL LETTER A
00DF; F; 0073 0073; # LATIN SMALL LETTER SHARP S
1E9E; S; 00DF; # LATIN CAPITAL LETTER SHARP S
1E9E; F; 0073 0073; # LATIN CAPITAL LETTER SHARP S
"""


class TestMainGroup:
    """Tests for the top-level command group."""

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        for command in ("convert", "compare", "fold", "gen-table"):
            assert command in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_config_file(self, runner: CliRunner, temp_dir: Path) -> None:
        config = temp_dir / "broken.toml"
        config.write_text("[logging\n", encoding="utf-8")

        result = runner.invoke(main, ["--config", str(config), "fold", "A"])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Cannot load config file" in result.output

    def test_invalid_env_value(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["fold", "A"], env={"UCVT_LOG_LEVEL": "loud"})

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "level must be one of" in result.output

    def test_log_options(self, runner: CliRunner, temp_dir: Path) -> None:
        log_file = temp_dir / "ucvt.log"
        source = temp_dir / "in.txt"
        source.write_bytes(b"abc")

        result = runner.invoke(
            main,
            [
                "--log-level",
                "info",
                "--log-json",
                "--log-file",
                str(log_file),
                "convert",
                "--from",
                "utf8",
                "--to",
                "ucs4",
                str(source),
                str(temp_dir / "out.bin"),
            ],
        )

        assert result.exit_code == 0
        entries = [
            json.loads(line)
            for line in log_file.read_text(encoding="utf-8").splitlines()
        ]
        converted = [e for e in entries if e["message"].startswith("Converted")]
        assert len(converted) == 1
        assert converted[0]["conversion"] == "utf8->ucs4"
        assert converted[0]["input_path"] == str(source)
        assert converted[0]["units_written"] == 3


class TestConvertCommand:
    """Tests for ucvt convert."""

    def _convert(
        self, runner: CliRunner, temp_dir: Path, data: bytes, *options: str
    ) -> tuple[object, Path]:
        source = temp_dir / "input.bin"
        source.write_bytes(data)
        output = temp_dir / "output.bin"
        result = runner.invoke(main, ["convert", *options, str(source), str(output)])
        return result, output

    def test_utf8_to_ucs4(self, runner: CliRunner, temp_dir: Path) -> None:
        text = "hé😀"
        result, output = self._convert(
            runner, temp_dir, text.encode(), "--from", "utf8", "--to", "ucs4"
        )

        assert result.exit_code == 0
        assert "Wrote 3 ucs4 units" in result.output
        assert output.read_bytes() == text.encode("utf-32-le")

    def test_utf8_to_utf16_big_endian(self, runner: CliRunner, temp_dir: Path) -> None:
        text = "a😀b"
        result, output = self._convert(
            runner,
            temp_dir,
            text.encode(),
            "--from",
            "utf8",
            "--to",
            "utf16",
            "--byte-order",
            "big",
        )

        assert result.exit_code == 0
        assert output.read_bytes() == text.encode("utf-16-be")

    def test_utf16_to_utf8(self, runner: CliRunner, temp_dir: Path) -> None:
        text = "日本 😀"
        result, output = self._convert(
            runner,
            temp_dir,
            text.encode("utf-16-le"),
            "--from",
            "utf16",
            "--to",
            "utf8",
        )

        assert result.exit_code == 0
        assert output.read_bytes() == text.encode()

    def test_ucs2_to_utf8(self, runner: CliRunner, temp_dir: Path) -> None:
        data = "a€".encode("utf-16-le")
        result, output = self._convert(
            runner, temp_dir, data, "--from", "ucs2", "--to", "utf8"
        )

        assert result.exit_code == 0
        assert output.read_bytes() == "a€".encode()

    def test_latin1_to_utf8(self, runner: CliRunner, temp_dir: Path) -> None:
        result, output = self._convert(
            runner, temp_dir, b"caf\xe9", "--from", "latin1", "--to", "utf8"
        )

        assert result.exit_code == 0
        assert output.read_bytes() == "café".encode()

    def test_malformed_input_replaced(self, runner: CliRunner, temp_dir: Path) -> None:
        result, output = self._convert(
            runner, temp_dir, b"\xc0\x80A", "--from", "utf8", "--to", "ucs4"
        )

        assert result.exit_code == 0
        assert output.read_bytes() == "?A".encode("utf-32-le")

    def test_requires_one_utf8_side(self, runner: CliRunner, temp_dir: Path) -> None:
        result, _ = self._convert(
            runner, temp_dir, b"abc", "--from", "utf8", "--to", "utf8"
        )

        assert result.exit_code == ExitCode.USAGE_ERROR
        assert "Exactly one of --from and --to must be utf8" in result.output

    def test_latin1_is_source_only(self, runner: CliRunner, temp_dir: Path) -> None:
        result, _ = self._convert(
            runner, temp_dir, b"abc", "--from", "utf8", "--to", "latin1"
        )

        assert result.exit_code == ExitCode.USAGE_ERROR

    def test_input_not_found(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            main,
            [
                "convert",
                "--from",
                "utf8",
                "--to",
                "ucs4",
                str(temp_dir / "missing.txt"),
                str(temp_dir / "out.bin"),
            ],
        )

        assert result.exit_code == ExitCode.INPUT_NOT_FOUND
        assert "File not found" in result.output

    def test_odd_length_wide_input(self, runner: CliRunner, temp_dir: Path) -> None:
        result, _ = self._convert(
            runner, temp_dir, b"abc", "--from", "ucs2", "--to", "utf8"
        )

        assert result.exit_code == ExitCode.INPUT_INVALID
        assert "not a multiple of 2 bytes" in result.output

    def test_output_not_writable(self, runner: CliRunner, temp_dir: Path) -> None:
        source = temp_dir / "input.txt"
        source.write_bytes(b"abc")

        result = runner.invoke(
            main,
            [
                "convert",
                "--from",
                "utf8",
                "--to",
                "ucs2",
                str(source),
                str(temp_dir / "no-such-dir" / "out.bin"),
            ],
        )

        assert result.exit_code == ExitCode.OUTPUT_ERROR
        assert "Cannot write" in result.output


class TestCompareCommand:
    """Tests for ucvt compare."""

    def test_equal(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["compare", "ABC", "abc"])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output.strip() == "0"

    def test_full_folding(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["compare", "Straße", "STRASSE"])

        assert result.exit_code == ExitCode.SUCCESS

    def test_different(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["compare", "apple", "Banana"])

        assert result.exit_code == ExitCode.STRINGS_DIFFER
        assert result.output.strip() == "-1"

    def test_ascii_does_not_fold_non_ascii(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["compare", "--ascii", "É", "é"])

        assert result.exit_code == ExitCode.STRINGS_DIFFER
        assert result.output.strip() == "-1"

    def test_ascii_equal(self, runner: CliRunner) -> None:
        result = runner.invoke(
            main, ["compare", "--ascii", "Content-Type", "CONTENT-TYPE"]
        )

        assert result.exit_code == ExitCode.SUCCESS

    def test_bounded(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["compare", "-n", "3", "abcX", "ABCy"])

        assert result.exit_code == ExitCode.SUCCESS

    def test_bound_counts_codepoints(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["compare", "-n", "2", "ßX", "ßY"])

        assert result.exit_code == ExitCode.STRINGS_DIFFER

    def test_negative_bound_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["compare", "--max", "-1", "a", "b"])

        assert result.exit_code == ExitCode.USAGE_ERROR


class TestFoldCommand:
    """Tests for ucvt fold."""

    def test_expansion(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["fold", "U+00DF"])

        assert result.exit_code == 0
        assert result.output.strip() == "U+00DF -> U+0073 U+0073"

    def test_character_and_hex_forms(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["fold", "A", "0x130", "4E00"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "U+0041 -> U+0061",
            "U+0130 -> U+0069 U+0307",
            "U+4E00 -> U+4E00",
        ]

    def test_invalid_codepoint(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["fold", "U+ZZZZ"])

        assert result.exit_code == ExitCode.USAGE_ERROR

    def test_out_of_range(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["fold", "110000"])

        assert result.exit_code == ExitCode.USAGE_ERROR
        assert "out of range" in result.output


class TestGenTableCommand:
    """Tests for ucvt gen-table."""

    def test_from_local_file(self, runner: CliRunner, temp_dir: Path) -> None:
        source = temp_dir / "CaseFolding.txt"
        source.write_text(CASEFOLDING_SAMPLE, encoding="utf-8")
        output = temp_dir / "_table.py"

        result = runner.invoke(
            main, ["gen-table", "--source", str(source), "-o", str(output)]
        )

        assert result.exit_code == 0
        assert "Wrote 3 case-fold mappings" in result.output
        assert "(0x00DF, 0x0073, 0x0073, 0x0000)," in output.read_text(encoding="utf-8")

    def test_source_from_config(
        self, runner: CliRunner, temp_dir: Path, isolated_config: Path
    ) -> None:
        isolated_config.write_text(
            '[casefold]\nsource = "/data/CaseFolding.txt"\ntimeout_seconds = 5\n',
            encoding="utf-8",
        )
        output = temp_dir / "_table.py"

        with patch(
            "ucvt.cli.gen_table.generate_table", return_value=7
        ) as mock_generate:
            result = runner.invoke(main, ["gen-table", "-o", str(output)])

        assert result.exit_code == 0
        mock_generate.assert_called_once_with(
            output,
            source="/data/CaseFolding.txt",
            from_interpreter=False,
            timeout=5.0,
        )

    def test_from_interpreter(self, runner: CliRunner, temp_dir: Path) -> None:
        output = temp_dir / "_table.py"

        result = runner.invoke(
            main, ["gen-table", "--from-interpreter", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert "(0x0041, 0x0061, 0x0000, 0x0000)," in output.read_text(encoding="utf-8")

    def test_exclusive_sources(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            main,
            [
                "gen-table",
                "--source",
                "x.txt",
                "--from-interpreter",
                "-o",
                str(temp_dir / "t.py"),
            ],
        )

        assert result.exit_code == ExitCode.USAGE_ERROR

    def test_missing_source(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(
            main,
            [
                "gen-table",
                "--source",
                str(temp_dir / "missing.txt"),
                "-o",
                str(temp_dir / "t.py"),
            ],
        )

        assert result.exit_code == ExitCode.INPUT_NOT_FOUND
        assert "File not found" in result.output

    def test_malformed_source(self, runner: CliRunner, temp_dir: Path) -> None:
        source = temp_dir / "CaseFolding.txt"
        source.write_text("0041; Q; 0061; # bad status\n", encoding="utf-8")

        result = runner.invoke(
            main, ["gen-table", "--source", str(source), "-o", str(temp_dir / "t.py")]
        )

        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "unknown status" in result.output

    @patch("ucvt.cli.gen_table.generate_table")
    def test_fetch_error(
        self, mock_generate: MagicMock, runner: CliRunner, temp_dir: Path
    ) -> None:
        mock_generate.side_effect = CaseFoldingFetchError(
            "https://example.invalid/cf.txt", "HTTP 503"
        )

        result = runner.invoke(
            main,
            [
                "gen-table",
                "--source",
                "https://example.invalid/cf.txt",
                "-o",
                str(temp_dir / "t.py"),
            ],
        )

        assert result.exit_code == ExitCode.FETCH_ERROR
        assert "HTTP 503" in result.output
