"""Tests for the describe and validate CLI commands."""

from __future__ import annotations

import argparse
import json
import logging
import textwrap

import pytest

from input_validation import __version__
from input_validation.interfaces.cli.main import build_parser, cmd_describe, cmd_validate, main

SAMPLE_MODULE = textwrap.dedent(
    """
    from input_validation import BaseViewModel, observable, validated


    class LoginForm(BaseViewModel):
        user_name = validated("User name is required", default="", value_type=str)
        age = validated("Age must be between 0 and 150", default=0, value_type=int)
        remember_me = observable(default=False, value_type=bool)

        def declare_validators(self, register):
            register("user_name", lambda: bool(self.user_name.strip()))
            register("age", lambda: 0 <= self.age <= 150)


    class BrokenForm(BaseViewModel):
        first = validated("First is required", default="")
        second = validated("Second is required", default="")

        def declare_validators(self, register):
            register("first", lambda: bool(self.first))


    NOT_A_MODEL = 42
    """
)


@pytest.fixture
def sample_forms(tmp_path, monkeypatch):
    """Write an importable module with sample view models."""
    module_dir = tmp_path / "modules"
    module_dir.mkdir()
    (module_dir / "cli_sample_forms.py").write_text(SAMPLE_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(module_dir))
    return "cli_sample_forms"


def _validate_args(target, values=None, report=False, report_json=False):
    return argparse.Namespace(
        target=target, values=values, report=report, report_json=report_json
    )


class TestCmdDescribe:
    """Tests for cmd_describe function."""

    def test_describe_lists_properties(self, sample_forms, capsys):  # pylint: disable=redefined-outer-name
        result = cmd_describe(argparse.Namespace(target=f"{sample_forms}:LoginForm"))

        assert result == 0
        out = capsys.readouterr().out
        assert "cli_sample_forms:LoginForm" in out
        assert "user_name: str = ''" in out
        assert "validated: User name is required" in out
        assert "remember_me: bool = False" in out
        assert "last_error: str = '' (read-only)" in out

    def test_describe_incomplete_declarations(self, sample_forms, caplog):  # pylint: disable=redefined-outer-name
        with caplog.at_level(logging.ERROR):
            result = cmd_describe(argparse.Namespace(target=f"{sample_forms}:BrokenForm"))

        assert result == 2
        assert "Missing validators for: second" in caplog.text

    def test_describe_missing_module(self):
        result = cmd_describe(argparse.Namespace(target="no_such_module_xyz:Form"))
        assert result == 3

    def test_describe_missing_class(self, sample_forms):  # pylint: disable=redefined-outer-name
        result = cmd_describe(argparse.Namespace(target=f"{sample_forms}:Nope"))
        assert result == 3

    def test_describe_not_a_view_model(self, sample_forms):  # pylint: disable=redefined-outer-name
        result = cmd_describe(argparse.Namespace(target=f"{sample_forms}:NOT_A_MODEL"))
        assert result == 2

    def test_describe_bad_target_format(self):
        result = cmd_describe(argparse.Namespace(target="just_a_module"))
        assert result == 2


class TestCmdValidate:
    """Tests for cmd_validate function."""

    def test_validate_defaults_fail(self, sample_forms, capsys):  # pylint: disable=redefined-outer-name
        result = cmd_validate(_validate_args(f"{sample_forms}:LoginForm"))

        assert result == 2
        out = capsys.readouterr().out
        assert "Properties: 2 validated (1 passed, 1 failed)" in out
        assert "❌ user_name: User name is required" in out

    def test_validate_with_values_passes(self, sample_forms, tmp_path, capsys):  # pylint: disable=redefined-outer-name
        values_file = tmp_path / "values.yaml"
        values_file.write_text("user_name: alice\nage: 30\nremember_me: true\n", encoding="utf-8")

        result = cmd_validate(_validate_args(f"{sample_forms}:LoginForm", values=str(values_file)))

        assert result == 0
        assert "✅ All properties are valid!" in capsys.readouterr().out

    def test_validate_warns_about_unknown_and_rejected_values(
        self, sample_forms, tmp_path, caplog
    ):  # pylint: disable=redefined-outer-name
        values_file = tmp_path / "values.yaml"
        values_file.write_text(
            "user_name: alice\nage: old\nnickname: al\nlast_error: hacked\n", encoding="utf-8"
        )

        with caplog.at_level(logging.WARNING):
            result = cmd_validate(
                _validate_args(f"{sample_forms}:LoginForm", values=str(values_file))
            )

        # age keeps its valid default
        assert result == 0
        assert "Unknown property 'nickname'" in caplog.text
        assert "Property 'last_error' is read-only" in caplog.text
        assert "was not accepted" in caplog.text

    def test_validate_missing_values_file(self, sample_forms, tmp_path):  # pylint: disable=redefined-outer-name
        result = cmd_validate(
            _validate_args(f"{sample_forms}:LoginForm", values=str(tmp_path / "missing.yaml"))
        )
        assert result == 2

    def test_validate_broken_declarations(self, sample_forms):  # pylint: disable=redefined-outer-name
        assert cmd_validate(_validate_args(f"{sample_forms}:BrokenForm")) == 2

    def test_validate_writes_reports(self, sample_forms, tmp_path):  # pylint: disable=redefined-outer-name
        md_dir = tmp_path / "md"
        json_dir = tmp_path / "json"

        result = cmd_validate(
            _validate_args(
                f"{sample_forms}:LoginForm", report=str(md_dir), report_json=str(json_dir)
            )
        )

        assert result == 2
        markdown = (md_dir / "LoginForm_validation.md").read_text(encoding="utf-8")
        assert "# Validation Report: LoginForm" in markdown
        assert "- **user_name**: User name is required" in markdown

        data = json.loads((json_dir / "LoginForm_validation.json").read_text(encoding="utf-8"))
        assert data["summary"] == {"validated": 2, "passed": 1, "failed": 1}

    def test_validate_default_report_location(self, sample_forms, tmp_path, monkeypatch):  # pylint: disable=redefined-outer-name
        monkeypatch.chdir(tmp_path)

        cmd_validate(_validate_args(f"{sample_forms}:LoginForm", report=True))

        assert (tmp_path / "LoginForm_validation.md").exists()


@pytest.fixture
def restore_root_logger():
    """Undo the handler and level changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestMain:
    """Tests for argument parsing and the main entry point."""

    def test_parser_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_parser_description_shows_package_version(self):
        assert build_parser().description == f"Input Validation (v{__version__})"

    def test_parser_validate_options(self):
        args = build_parser().parse_args(
            ["validate", "pkg.mod:Form", "--values", "v.yaml", "--report"]
        )
        assert args.target == "pkg.mod:Form"
        assert args.values == "v.yaml"
        assert args.report is True
        assert args.report_json is False
        assert args.func is cmd_validate

    def test_main_runs_describe(self, sample_forms, restore_root_logger):  # pylint: disable=redefined-outer-name
        assert main(["--errors-only", "describe", f"{sample_forms}:LoginForm"]) == 0
        assert restore_root_logger.level == logging.ERROR
