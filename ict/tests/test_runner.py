from unittest.mock import MagicMock, patch

import pytest

from ict.runner import build_parser, main, split_passthrough
from ict.shared.errors import TargetLookupError, UniverseQueryError
from ict.shared.settings import SETTINGS_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep a developer's ict.yaml or $ICT_SETTINGS out of the tests."""
    monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def targets_file(tmp_path):
    path = tmp_path / "targets.txt"
    path.write_text(
        "//rs/tests:basic_health_test\n//rs/tests:nns_test\n",
        encoding="utf-8",
    )
    return path


class TestSplitPassthrough:
    def test_no_separator(self):
        assert split_passthrough(["//a:b", "-n"]) == (["//a:b", "-n"], [])

    def test_separator(self):
        assert split_passthrough(["//a:b", "--", "--test_output=errors", "-k"]) == (
            ["//a:b"],
            ["--test_output=errors", "-k"],
        )

    def test_only_first_separator_splits(self):
        assert split_passthrough(["//a:b", "--", "x", "--", "y"]) == (["//a:b"], ["x", "--", "y"])


class TestBuildParser:
    def test_flags(self):
        args = build_parser().parse_args(
            ["//a:b", "-n", "-k", "-i", "Foo", "--farm-url", "https://farm.example"]
        )
        assert args.target == "//a:b"
        assert args.dry_run is True
        assert args.keepalive is True
        assert args.include_tests == "Foo"
        assert args.farm_url == "https://farm.example"

    def test_defaults(self):
        args = build_parser().parse_args(["//a:b"])
        assert args.dry_run is False
        assert args.keepalive is False
        assert args.include_tests == ""
        assert args.farm_url == ""
        assert args.settings is None
        assert args.targets_file is None

    def test_target_required(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2


class TestMain:
    def test_dry_run(self, targets_file, capsys):
        result = main([
            "//rs/tests:basic_health_test",
            "--dry-run",
            "--targets-file",
            str(targets_file),
            "--",
            "--test_output=errors",
        ])

        assert result == 0
        out = capsys.readouterr().out
        assert (
            "$ bazel test //rs/tests:basic_health_test --config=systest "
            "--test_output=errors --cache_test_results=no"
        ) in out

    def test_not_found_with_suggestions(self, targets_file, capsys):
        result = main(["//rs/tests:basic_helth_test", "--targets-file", str(targets_file)])

        assert result == 1
        err = capsys.readouterr().err
        assert "Error: No test target `//rs/tests:basic_helth_test` was found" in err
        assert "Did you mean any of:\n//rs/tests:basic_health_test\n//rs/tests:nns_test" in err

    def test_not_found_no_suggestions(self, tmp_path, capsys):
        empty = tmp_path / "empty.txt"
        empty.write_text("", encoding="utf-8")

        result = main(["//a:b", "--targets-file", str(empty)])

        assert result == 1
        err = capsys.readouterr().err
        assert "Error: No test target `//a:b` was found" in err
        assert "Did you mean" not in err

    @patch("ict.runner.run")
    def test_real_run_returns_runner_status(self, mock_run, targets_file):
        mock_run.return_value = 4

        result = main([
            "//rs/tests:nns_test",
            "-k",
            "-i",
            "Foo",
            "--targets-file",
            str(targets_file),
        ])

        assert result == 4
        args, kwargs = mock_run.call_args
        assert args[0] == (
            "bazel",
            "test",
            "//rs/tests:nns_test",
            "--config=systest",
            "--cache_test_results=no",
            "--test_arg=--include-tests=Foo",
            "--test_timeout=3600",
            "--test_arg=--debug-keepalive",
        )
        assert kwargs == {"dry_run": False}

    @patch("ict.runner.run")
    def test_extra_positionals_precede_passthrough(self, mock_run, targets_file):
        mock_run.return_value = 0

        main(["//rs/tests:nns_test", "extra", "--targets-file", str(targets_file), "--", "after"])

        args, _ = mock_run.call_args
        assert args[0][4:6] == ("extra", "after")

    @patch("ict.runner.run")
    def test_extra_positionals_after_options(self, mock_run, targets_file):
        mock_run.return_value = 0

        result = main([
            "//rs/tests:nns_test",
            "-n",
            "extra",
            "--targets-file",
            str(targets_file),
            "more",
            "--",
            "after",
        ])

        assert result == 0
        args, kwargs = mock_run.call_args
        assert args[0][4:7] == ("extra", "more", "after")
        assert kwargs == {"dry_run": True}

    def test_missing_targets_file(self, tmp_path, capsys):
        result = main(["//a:b", "--targets-file", str(tmp_path / "missing.txt")])

        assert result == 1
        assert "Error: Failed to read targets file" in capsys.readouterr().err

    @patch("ict.runner.BazelTargetIndex")
    def test_lookup_error(self, mock_index_cls, capsys):
        mock_index = MagicMock()
        mock_index.exists.side_effect = TargetLookupError("server unreachable", "//a:b")
        mock_index_cls.return_value = mock_index

        result = main(["//a:b"])

        assert result == 1
        assert "Error: Failed to look up `//a:b`: server unreachable" in capsys.readouterr().err
        mock_index.enumerate.assert_not_called()

    @patch("ict.runner.BazelTargetIndex")
    def test_universe_error(self, mock_index_cls, capsys):
        mock_index = MagicMock()
        mock_index.exists.return_value = False
        mock_index.enumerate.side_effect = UniverseQueryError("bad query")
        mock_index_cls.return_value = mock_index

        result = main(["//a:b"])

        assert result == 1
        err = capsys.readouterr().err
        assert "Error: bad query" in err
        assert "was found" not in err

    @patch("ict.runner.BazelTargetIndex")
    def test_verbose_passed_to_index(self, mock_index_cls):
        mock_index_cls.return_value.exists.return_value = True

        main(["//a:b", "-n", "-v"])

        _, kwargs = mock_index_cls.call_args
        assert kwargs == {"verbose": True}

    def test_settings_file(self, tmp_path, targets_file, capsys):
        settings = tmp_path / "custom.yaml"
        settings.write_text("runner: bazelisk\nconfig_flag: --config=local\n", encoding="utf-8")

        result = main([
            "//rs/tests:nns_test",
            "-n",
            "--settings",
            str(settings),
            "--targets-file",
            str(targets_file),
        ])

        assert result == 0
        assert "$ bazelisk test //rs/tests:nns_test --config=local" in capsys.readouterr().out

    def test_invalid_settings_file(self, tmp_path, capsys):
        settings = tmp_path / "custom.yaml"
        settings.write_text("- not a mapping\n", encoding="utf-8")

        result = main(["//a:b", "--settings", str(settings)])

        assert result == 1
        assert "Settings root must be a mapping" in capsys.readouterr().err

    def test_empty_target_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            main([""])
        assert exc_info.value.code == 2
