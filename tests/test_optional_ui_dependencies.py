"""Regression tests for optional CLI UI dependencies (rich/questionary/PyYAML).

These tests verify bootstrap commands are resilient when optional UI
packages are missing, and rendering/prompt paths fail cleanly only when
they are actually exercised.
"""

from __future__ import annotations

import io
import json
import sys

import pytest

from golemctl.cli.app import main
from golemctl.cli.console import console, escape_markup
from golemctl.cli.prompts import ask_yes_no
from golemctl.cli.render import ResponseRenderer
from golemctl.core.response import Scalar, Table
from golemctl.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)
    monkeypatch.setitem(sys.modules, "rich.text", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_notices_fall_back_to_plain_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    console.notice("Waiting for server start")
    assert capsys.readouterr().err == "Waiting for server start\n"


def test_machine_mode_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    out = io.StringIO()
    ResponseRenderer(True, file=out).render(Table.build(["a"], [[1]]))
    assert json.loads(out.getvalue()) == {"headers": ["a"], "values": [[1]]}


def test_human_table_errors_cleanly_when_rich_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    with pytest.raises(EnvironmentError, match="rich is not installed"):
        ResponseRenderer(False, file=io.StringIO()).render(Table.build(["a"], [[1]]))


def test_human_scalar_errors_cleanly_when_yaml_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "yaml", None)
    with pytest.raises(EnvironmentError, match="PyYAML is not installed"):
        ResponseRenderer(False, file=io.StringIO()).render(Scalar({"a": 1}))


def test_prompt_errors_cleanly_when_questionary_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_questionary(monkeypatch)
    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        ask_yes_no("Proceed?", True)


def test_escape_markup_without_rich_returns_text(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setitem(sys.modules, "rich.markup", None)
    assert escape_markup("[missing]") == "[missing]"
