"""Unit tests for the command-line entry point (easy_cfhighlander.cli).

Tests cover:
- parse_params
- build_config overlaying environment values
- main exit codes for success and every failure family
- RichPrompter delegation to rich.prompt.Prompt
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from easy_cfhighlander.cli import (
    EXIT_CODE_ERROR,
    EXIT_CODE_SUCCESS,
    RichPrompter,
    build_config,
    build_parser,
    main,
    parse_params,
)


def _code_args(root: Path) -> list[str]:
    return [
        "code",
        "--cwd", str(root),
        "-n",
        "-p", "project=acme",
        "-p", "db_name=acme",
        "-p", "dns_domain=acme.com",
        "-p", "dev_account=111",
        "-p", "ops_account=222",
        "-p", "prod_account=333",
    ]


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------


class TestParseParams:
    @pytest.mark.unit
    def test_key_value(self):
        assert parse_params(["project=acme", "redis_enabled = true"]) == {
            "project": "acme",
            "redis_enabled": "true",
        }

    @pytest.mark.unit
    def test_value_may_contain_equals(self):
        assert parse_params(["dns_domain=a=b"]) == {"dns_domain": "a=b"}

    @pytest.mark.unit
    def test_empty(self):
        assert parse_params(None) == {}
        assert parse_params([]) == {}

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["project", "=acme", ""])
    def test_invalid(self, raw):
        with pytest.raises(ValueError, match="Invalid -p parameter"):
            parse_params([raw])


class TestBuildConfig:
    @pytest.mark.unit
    def test_cli_overrides_env(self, tmp_path: Path):
        args = build_parser().parse_args(["code", "--cwd", str(tmp_path), "-n"])
        env = {"EASY_CFHIGHLANDER_CWD": "/elsewhere", "EASY_CFHIGHLANDER_MAX_ATTEMPTS": "2"}
        with patch.dict(os.environ, env, clear=True):
            config = build_config(args)
        assert config.cwd == tmp_path
        assert config.interactive is False
        assert config.max_attempts == 2

    @pytest.mark.unit
    def test_invalid_max_attempts(self, tmp_path: Path):
        args = build_parser().parse_args(["code", "--max-attempts", "0"])
        with pytest.raises(ValueError):
            build_config(args)

    @pytest.mark.unit
    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    @pytest.mark.unit
    def test_success(self, output_root: Path):
        assert main(_code_args(output_root)) == EXIT_CODE_SUCCESS
        assert (output_root / "acme.config.yaml").is_file()
        assert (output_root / "Jenkinsfile").is_file()
        assert (output_root / ".easy" / "easy-cfhighlander-manifest.json").is_file()

    @pytest.mark.unit
    def test_missing_value_non_interactive(self, output_root: Path):
        assert main(["code", "--cwd", str(output_root), "-n"]) == EXIT_CODE_ERROR
        assert not (output_root / "Jenkinsfile").exists()

    @pytest.mark.unit
    def test_invalid_value_non_interactive(self, output_root: Path):
        args = [*_code_args(output_root), "-p", "db_name=db1"]
        assert main(args) == EXIT_CODE_ERROR

    @pytest.mark.unit
    def test_blank_param_non_interactive(self, output_root: Path):
        args = [*_code_args(output_root), "-p", "project="]
        assert main(args) == EXIT_CODE_ERROR
        assert not (output_root / "Jenkinsfile").exists()

    @pytest.mark.unit
    def test_bad_param_format(self, output_root: Path):
        assert main(["code", "--cwd", str(output_root), "-p", "oops"]) == EXIT_CODE_ERROR

    @pytest.mark.unit
    def test_template_failure(self, output_root: Path, tmp_path: Path):
        empty_templates = tmp_path / "no-templates"
        empty_templates.mkdir()
        args = [*_code_args(output_root), "--template-dir", str(empty_templates)]
        assert main(args) == EXIT_CODE_ERROR

    @pytest.mark.unit
    def test_aborted_prompt(self, output_root: Path):
        with patch("easy_cfhighlander.cli.Prompt.ask", side_effect=EOFError):
            assert main(["code", "--cwd", str(output_root)]) == EXIT_CODE_ERROR

    @pytest.mark.unit
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "easy-cfhighlander" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# RichPrompter
# ---------------------------------------------------------------------------


class TestRichPrompter:
    @pytest.mark.unit
    def test_ask_without_default(self):
        output = MagicMock()
        with patch("easy_cfhighlander.cli.Prompt.ask", return_value="acme") as ask:
            assert RichPrompter(output).ask("Project name", None) == "acme"
        ask.assert_called_once_with("Project name", console=output)

    @pytest.mark.unit
    def test_ask_with_default(self):
        output = MagicMock()
        with patch("easy_cfhighlander.cli.Prompt.ask", return_value="acme") as ask:
            RichPrompter(output).ask("Project name", "acme")
        ask.assert_called_once_with("Project name", default="acme", console=output)

    @pytest.mark.unit
    def test_reject_prints_message(self):
        output = MagicMock()
        RichPrompter(output).reject("A value is required")
        assert "A value is required" in output.print.call_args[0][0]
