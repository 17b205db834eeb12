"""
Integration tests for the command line entry point.
"""

import json
from pathlib import Path

import pytest

from keysync import __version__
from keysync.main import EXIT_CONFIG, EXIT_FAILED, EXIT_OK, main, parse_args


class TestParseArgs:
    """Test flag names and aliases."""

    def test_short_flags(self):
        args = parse_args(["-s", "src", "-i", "base", "-d", "en", "-f", "t", "-o", "out",
                           "-l", "en fr", "-p", "??", "-t"])

        assert args.source == Path("src")
        assert args.input_file == "base"
        assert args.default_language == "en"
        assert args.function_name == "t"
        assert args.output == Path("out")
        assert args.languages == "en fr"
        assert args.prefix == "??"
        assert args.transformise is True

    def test_camel_case_aliases(self):
        args = parse_args(["--source", "src", "--inputFile", "base", "--functionName", "i18n"])

        assert args.input_file == "base"
        assert args.function_name == "i18n"

    def test_unset_flags_are_none(self):
        args = parse_args(["-s", "src"])

        assert args.prefix is None
        assert args.transformise is None
        assert args.check is None

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            parse_args(["--version"])

        assert __version__ in capsys.readouterr().out


class TestMain:
    """Test exit codes and outputs."""

    def test_missing_source_exits_with_config_error(self):
        assert main([]) == EXIT_CONFIG

    def test_sync(self, source_dir: Path, temp_dir: Path):
        out = temp_dir / "out"

        code = main(["-s", str(source_dir), "-o", str(out), "-l", "de", "-p", "@@"])

        assert code == EXIT_OK
        data = json.loads((out / "de" / "common.json").read_text(encoding="utf-8"))
        assert data["title"] == "@@title"

    def test_check_mode(self, source_dir: Path, temp_dir: Path):
        out = temp_dir / "out"
        argv = ["-s", str(source_dir), "-o", str(out), "-l", "de"]

        assert main(argv + ["--check"]) == EXIT_FAILED
        assert main(argv) == EXIT_OK
        assert main(argv + ["--check"]) == EXIT_OK

    def test_failures_set_exit_code(self, source_dir: Path, temp_dir: Path):
        (source_dir / "broken.json").write_text("{", encoding="utf-8")

        code = main(["-s", str(source_dir), "-o", str(temp_dir / "out")])

        assert code == EXIT_FAILED

    def test_report_and_config_file(self, source_dir: Path, temp_dir: Path):
        config_file = temp_dir / "keysync.yaml"
        config_file.write_text(
            f"source: {source_dir}\noutput: {temp_dir / 'out'}\nlanguages: [fr]\n",
            encoding="utf-8",
        )
        report_file = temp_dir / "report.json"

        code = main(["--config-file", str(config_file), "--report", str(report_file), "--json-logs"])

        assert code == EXIT_OK
        report = json.loads(report_file.read_text(encoding="utf-8"))
        assert report["summary_by_language"]["fr"]["files"] == 2

    def test_unwritable_report_fails(self, source_dir: Path, temp_dir: Path):
        out = temp_dir / "out"
        report_dir = temp_dir / "report"
        report_dir.mkdir()

        code = main(["-s", str(source_dir), "-o", str(out), "--report", str(report_dir)])

        assert code == EXIT_FAILED
        assert (out / "en" / "common.json").exists()

    def test_unreadable_config_file_exits_with_config_error(self, temp_dir: Path):
        assert main(["--config-file", str(temp_dir)]) == EXIT_CONFIG

    def test_extra_exclude_keeps_reserved_file_skipped(self, source_dir: Path, temp_dir: Path):
        out = temp_dir / "out"
        (source_dir / "rankmi.json").write_text('{"internal": "x"}', encoding="utf-8")
        (source_dir / "foo.json").write_text('{"a": "A"}', encoding="utf-8")

        code = main(["-s", str(source_dir), "-o", str(out), "--exclude", "foo"])

        assert code == EXIT_OK
        assert (out / "en" / "common.json").exists()
        assert not (out / "en" / "rankmi.json").exists()
        assert not (out / "en" / "foo.json").exists()
