from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from .results import CommandResult


@dataclass(frozen=True, slots=True)
class RenderSettings:
    output: str  # "table" | "json"
    quiet: bool
    verbosity: int


def _error_title(error_type: str) -> str:
    normalized = (error_type or "").strip()
    mapping = {
        "usage_error": "Usage error",
        "parse_error": "Parse error",
        "internal_error": "Internal error",
    }
    return mapping.get(normalized, "Error")


def _source_line(source: str, position: int) -> tuple[str, int]:
    """Return the line holding `position` and the caret column, tabs expanded."""
    start = source.rfind("\n", 0, position) + 1
    end = source.find("\n", position)
    if end < 0:
        end = len(source)
    line = source[start:end]
    return line.expandtabs(), len(line[: position - start].expandtabs())


def _render_error_details(
    *,
    stderr: Console,
    command: str,
    error_type: str,
    hint: str | None,
    details: dict[str, Any] | None,
    settings: RenderSettings,
) -> None:
    if settings.quiet:
        return

    if error_type == "parse_error" and details:
        source = details.get("input")
        position = details.get("position")
        if isinstance(source, str) and isinstance(position, int):
            line, column = _source_line(source, position)
            stderr.print(Text("  " + line), soft_wrap=True)
            stderr.print(Text("  " + " " * column + "^", style="bold red"), soft_wrap=True)

    if hint:
        stderr.print(Text(f"Hint: {hint}"))
    elif error_type == "usage_error":
        stderr.print(Text(f"Hint: run `labelexpr {command} --help`"))

    if details and settings.verbosity >= 1:
        stderr.print(Panel.fit(Text(json.dumps(details, ensure_ascii=False, indent=2))))


def _node_label(node: dict[str, Any]) -> Text:
    node_type = node.get("type")
    if node_type == "label":
        return Text(str(node.get("name", "")), style="green")
    if node_type == "not":
        return Text("NOT", style="bold")
    return Text(str(node_type).upper(), style="bold")


def _expression_tree(node: dict[str, Any], parent: Tree | None = None) -> Tree:
    label = _node_label(node)
    branch = Tree(label) if parent is None else parent.add(label)
    for key in ("operand", "left", "right"):
        child = node.get(key)
        if isinstance(child, dict):
            _expression_tree(child, branch)
    return branch


def _token_table(rows: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("pos", justify="right")
    table.add_column("type")
    table.add_column("text")
    if not rows:
        table.add_row("", "", "No tokens")
        return table
    for row in rows:
        table.add_row(str(row.get("pos", "")), str(row.get("type", "")), str(row.get("text", "")))
    return table


def _render_human_data(command: str, data: Any) -> RenderableType | None:
    if data is None:
        return None
    if command == "parse" and isinstance(data, dict):
        tree = _expression_tree(data.get("expression") or {})
        return Group(Text(str(data.get("text", ""))), tree)
    if command == "tokens" and isinstance(data, list):
        return _token_table(data)
    return Text(json.dumps(data, ensure_ascii=False, indent=2))


def render_result(result: CommandResult, *, settings: RenderSettings) -> int:
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if settings.output == "json":
        payload = result.model_dump(by_alias=True, mode="json")
        sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return 0

    if not result.ok:
        if result.error is not None:
            title = _error_title(result.error.type)
            stderr.print(Text(f"{title}: {result.error.message}"))
            _render_error_details(
                stderr=stderr,
                command=result.command,
                error_type=result.error.type,
                hint=result.error.hint,
                details=result.error.details,
                settings=settings,
            )
        else:
            stderr.print("Error")
        return 0

    renderable = _render_human_data(result.command, result.data)
    if renderable is not None:
        stdout.print(renderable)

    if not settings.quiet:
        for warning in result.warnings:
            stderr.print(Text(f"Warning: {warning}"))

    return 0
