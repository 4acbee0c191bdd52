"""
Tests for CLI argument parsing and validation.
"""
import os
import sys
from unittest import mock

import pytest

from finley import __version__
from finley.cli import CLIApplication
from finley.services.decompiler_service import DEFAULT_DECOMPILER


class TestArgumentParsing:
    """Test CLI argument parsing with argparse."""

    def test_defaults(self):
        args = CLIApplication.parse_args(["bins"])

        assert args.directory == "bins"
        assert args.extensions == ".dll,.exe"
        assert args.respect_file_case is False
        assert args.recursive is False
        assert args.allow_duplicates is False
        assert args.hash == "sha256"
        assert args.output == ""
        assert args.num_workers == (os.cpu_count() or 1)
        assert args.no_ilspy_errors is False
        assert args.ilspy == DEFAULT_DECOMPILER
        assert args.timeout is None
        assert args.verbose is False

    def test_short_flag_variants(self):
        args = CLIApplication.parse_args(["-r", "-v", "-e", ".dll", "-o", "decompiled", "bins"])

        assert args.recursive is True
        assert args.verbose is True
        assert args.extensions == ".dll"
        assert args.output == "decompiled"

    def test_long_flags(self):
        args = CLIApplication.parse_args([
            "--recursive", "--allow-duplicates", "--respect-file-case", "--no-ilspy-errors",
            "--num-workers", "3", "--ilspy", "/opt/ilspycmd", "--timeout", "90",
            "--hash", "xxh64", "bins",
        ])

        assert args.recursive is True
        assert args.allow_duplicates is True
        assert args.respect_file_case is True
        assert args.no_ilspy_errors is True
        assert args.num_workers == 3
        assert args.ilspy == "/opt/ilspycmd"
        assert args.timeout == 90.0
        assert args.hash == "xxh64"

    def test_reads_sys_argv_when_no_args_given(self):
        with mock.patch.object(sys, 'argv', ['finley', '-r', '/tmp/bins']):
            args = CLIApplication.parse_args()

        assert args.directory == "/tmp/bins"
        assert args.recursive is True

    def test_missing_directory_argument_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args([])
        assert exc_info.value.code == 2

    def test_unknown_hash_is_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args(["--hash", "md5", "bins"])
        assert exc_info.value.code == 2

    def test_version_exits_cleanly(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_help_exits_cleanly(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args(["--help"])

        assert exc_info.value.code == 0
        output = capsys.readouterr().out
        assert "--no-ilspy-errors" in output
        assert "Examples:" in output


class TestArgumentValidation:
    """Test validate_args exits with code 1 and a readable message."""

    @pytest.fixture
    def app(self):
        return CLIApplication()

    def validate(self, app, argv):
        app.validate_args(app.parse_args(argv))

    def test_missing_directory(self, app, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            self.validate(app, [str(tmp_path / "missing")])

        assert exc_info.value.code == 1
        assert "Directory not found" in capsys.readouterr().err

    def test_file_instead_of_directory(self, app, tmp_path, capsys):
        path = tmp_path / "a.dll"
        path.write_bytes(b"MZ")

        with pytest.raises(SystemExit) as exc_info:
            self.validate(app, [str(path)])

        assert exc_info.value.code == 1
        assert "Path is not a directory" in capsys.readouterr().err

    def test_empty_extensions(self, app, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            self.validate(app, ["-e", " , ", "-o", str(tmp_path / "out"), str(tmp_path)])

        assert exc_info.value.code == 1
        assert "comma separated list of file extensions" in capsys.readouterr().err

    @pytest.mark.parametrize("flag,value", [("--num-workers", "0"), ("--timeout", "0")])
    def test_non_positive_numbers(self, app, tmp_path, flag, value):
        with pytest.raises(SystemExit) as exc_info:
            self.validate(app, [flag, value, "-o", str(tmp_path / "out"), str(tmp_path)])

        assert exc_info.value.code == 1

    def test_output_path_is_a_file(self, app, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")

        with pytest.raises(SystemExit) as exc_info:
            self.validate(app, ["-o", str(blocker), str(tmp_path)])

        assert exc_info.value.code == 1
        assert "Output path is not a directory" in capsys.readouterr().err

    def test_valid_arguments_pass(self, app, tmp_path):
        self.validate(app, ["-o", str(tmp_path / "out"), str(tmp_path)])

    def test_missing_decompiler_exits(self, app, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("PATH", str(tmp_path))
        args = app.parse_args(["--ilspy", "ilspycmd-does-not-exist", str(tmp_path)])

        with pytest.raises(SystemExit) as exc_info:
            app.locate_decompiler(args)

        assert exc_info.value.code == 1
        assert "failed to find the specified decompiler binary" in capsys.readouterr().err


class TestCreateParams:

    def test_params_from_args(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "bins").mkdir()
        app = CLIApplication()
        args = app.parse_args(["-r", "-e", "dll,.EXE", "--num-workers", "2", "--timeout", "30", "bins"])

        params = app.create_params(args, "/opt/ilspycmd")

        assert params.target_dir == str((tmp_path / "bins").resolve())
        assert params.output_dir == "bins"
        assert params.extensions == [".dll", ".exe"]
        assert params.recursive is True
        assert params.num_workers == 2
        assert params.timeout == 30.0
        assert params.decompiler_path == "/opt/ilspycmd"

    def test_explicit_output_dir(self, tmp_path):
        app = CLIApplication()
        args = app.parse_args(["-o", "decompiled", str(tmp_path)])

        assert app.create_params(args, "ilspycmd").output_dir == "decompiled"
