from __future__ import annotations

import json
import logging
from typing import Any

import pytest

pytest.importorskip("rich_click")
pytest.importorskip("rich")

from click.testing import CliRunner, Result

import labelexpr
from labelexpr.cli.main import cli


def _payload(result: Result) -> dict[str, Any]:
    return json.loads(result.stdout.strip())


def test_cli_no_args_shows_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage:" in result.output


def test_cli_version_option() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert labelexpr.__version__ in result.output


def test_cli_json_after_subcommand() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["tokens", "a", "--json"])
    assert result.exit_code == 0
    payload = _payload(result)
    assert payload["ok"] is True
    assert payload["command"] == "tokens"
    assert "durationMs" in payload["meta"]


def test_cli_parse_json() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "parse", "a && b || c"])
    assert result.exit_code == 0
    payload = _payload(result)
    assert payload["ok"] is True
    assert payload["command"] == "parse"
    assert payload["data"]["text"] == "(a && (b || c))"
    assert payload["data"]["labels"] == ["a", "b", "c"]
    assert payload["data"]["expression"]["type"] == "and"
    assert payload["data"]["expression"]["right"]["type"] == "or"
    assert payload["error"] is None


def test_cli_parse_table_prints_tree() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "tag:a && !tag:b"])
    assert result.exit_code == 0
    assert "(tag:a && !tag:b)" in result.output
    assert "AND" in result.output
    assert "NOT" in result.output


def test_cli_parse_reads_stdin() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "-", "--json"], input="a || b\n")
    assert result.exit_code == 0
    assert _payload(result)["data"]["text"] == "(a || b)"


def test_cli_parse_empty_stdin_is_usage_error() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "parse", "-"], input="\n")
    assert result.exit_code == 2
    assert _payload(result)["error"]["type"] == "usage_error"


def test_cli_parse_error_json() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "parse", "a b"])
    assert result.exit_code == 2
    payload = _payload(result)
    assert payload["ok"] is False
    assert payload["data"] is None
    error = payload["error"]
    assert error["type"] == "parse_error"
    assert error["details"]["position"] == 2
    assert error["details"]["token"] == "b"
    assert error["details"]["errorClass"] == "InvalidBinaryOperatorError"
    assert "&&" in error["hint"]


def test_cli_parse_error_table_shows_caret() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "(a && b"])
    assert result.exit_code == 2
    assert "Parse error:" in result.output
    assert "(a && b" in result.output
    assert "^" in result.output


def test_cli_parse_error_caret_on_failing_line_with_tabs() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "a &&\n\tb c"])
    assert result.exit_code == 2
    lines = result.output.splitlines()
    assert "  " + " " * 8 + "b c" in lines
    assert [line for line in lines if line.strip() == "^"] == ["  " + " " * 10 + "^"]


@pytest.mark.parametrize(
    ("expression", "hint"),
    [
        ("(a && b", "Close every '('"),
        ("!!!a", "--max-depth"),
    ],
)
def test_cli_parse_error_hints(expression: str, hint: str) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "--max-depth", "3", "parse", expression])
    assert result.exit_code == 2
    assert hint in _payload(result)["error"]["hint"]


def test_cli_max_depth_option() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "--max-depth", "1", "parse", "(a)"])
    assert result.exit_code == 2
    assert _payload(result)["error"]["details"]["errorClass"] == "NestingTooDeepError"


def test_cli_max_depth_from_environment() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "parse", "!a"], env={"LABELEXPR_MAX_DEPTH": "1"})
    assert result.exit_code == 2
    assert _payload(result)["error"]["details"]["errorClass"] == "NestingTooDeepError"


def test_cli_invalid_max_depth_is_usage_error() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "parse", "a", "--max-depth", "0"])
    assert result.exit_code == 2
    error = _payload(result)["error"]
    assert error["type"] == "usage_error"
    assert "max_depth" in error["message"]


def test_cli_lenient_ignores_stray_close() -> None:
    runner = CliRunner()
    strict = runner.invoke(cli, ["--json", "parse", "a )"])
    assert strict.exit_code == 2

    lenient = runner.invoke(cli, ["--json", "parse", "a )", "--lenient"])
    assert lenient.exit_code == 0
    assert _payload(lenient)["data"]["text"] == "a"


def test_cli_tokens_json() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--json", "tokens", "a && !(b)"])
    assert result.exit_code == 0
    assert _payload(result)["data"] == [
        {"pos": 0, "type": "label", "text": "a"},
        {"pos": 2, "type": "and", "text": "&&"},
        {"pos": 5, "type": "not", "text": "!"},
        {"pos": 6, "type": "open_group", "text": "("},
        {"pos": 7, "type": "label", "text": "b"},
        {"pos": 8, "type": "close_group", "text": ")"},
    ]


def test_cli_tokens_table() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["tokens", "x || y"])
    assert result.exit_code == 0
    assert "or" in result.output
    assert "label" in result.output


def test_cli_verbose_logs_parse_and_restores_logging() -> None:
    logger = logging.getLogger("labelexpr")
    handlers_before = list(logger.handlers)

    runner = CliRunner()
    result = runner.invoke(cli, ["-vv", "parse", "a && b"])
    assert result.exit_code == 0
    assert "Parsed expression" in result.output
    assert logger.handlers == handlers_before
