"""Tests for response rendering (cli/render.py).

Output is captured through an in-memory stream; Rich renders to it
without a terminal.  Layout rules are asserted on the pure
:func:`layout_table_rows` helper.
"""

from __future__ import annotations

import io
import json
from typing import Any

import pytest
import yaml

from golemctl.cli.render import (
    RenderedRow,
    ResponseRenderer,
    build_rich_table,
    layout_table_rows,
    machine_table_payload,
)
from golemctl.core.response import Custom, Empty, Scalar, Table
from golemctl.exceptions import RenderError


def _render(model: Any, machine_mode: bool) -> str:
    out = io.StringIO()
    ResponseRenderer(machine_mode, file=out).render(model)
    return out.getvalue()


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

class TestLayoutTableRows:
    def test_rows_converted_to_text(self) -> None:
        table = Table.build(["a", "b", "c"], [["x", None, 1.5]])
        assert layout_table_rows(table) == [RenderedRow(("x", "", "1.5"))]

    def test_zero_rows_gives_one_blank_row(self) -> None:
        table = Table.build(["a", "b", "c"])
        assert layout_table_rows(table) == [RenderedRow(("", "", ""))]

    def test_non_positional_rows_skipped(self) -> None:
        table = Table.build(["a"], [{"a": 1}, ["ok"], "text"])
        assert layout_table_rows(table) == [RenderedRow(("ok",))]

    def test_short_rows_padded(self) -> None:
        table = Table.build(["a", "b"], [["x"]])
        assert layout_table_rows(table) == [RenderedRow(("x", ""))]

    def test_summary_after_blank_separator(self) -> None:
        table = Table.build(["a", "b"], [["x", 1]], [["sub", 1], ["total", 2]])
        rows = layout_table_rows(table)
        assert rows[1] == RenderedRow(("", ""))
        assert [r.cells for r in rows[2:]] == [("sub", "1"), ("total", "2")]

    def test_only_last_summary_row_emphasized(self) -> None:
        summary = [["s1", 1], ["s2", 2], ["total", 3]]
        rows = layout_table_rows(Table.build(["a", "b"], [["x", 1]], summary))
        flags = [r.emphasized for r in rows]
        assert flags == [False, False, False, False, True]

    def test_single_summary_row_emphasized(self) -> None:
        rows = layout_table_rows(Table.build(["a"], [["x"]], [["total"]]))
        assert rows[-1].emphasized

    def test_no_summary_no_separator(self) -> None:
        rows = layout_table_rows(Table.build(["a"], [["x"], ["y"]]))
        assert len(rows) == 2
        assert not any(r.emphasized for r in rows)


class TestRichTable:
    def test_only_last_summary_row_bold(self) -> None:
        summary = [["s1", 1], ["total", 3]]
        grid = build_rich_table(Table.build(["a", "b"], [["x", 1]], summary))
        assert [row.style for row in grid.rows] == [None, None, None, "bold"]

    def test_bold_sequence_in_terminal_output(self) -> None:
        from rich.console import Console

        out = io.StringIO()
        grid = build_rich_table(Table.build(["a"], [["plain"]], [["total"]]))
        Console(file=out, force_terminal=True, color_system="standard", width=40).print(grid)
        total_line = next(line for line in out.getvalue().splitlines() if "total" in line)
        plain_line = next(line for line in out.getvalue().splitlines() if "plain" in line)
        assert "\x1b[1m" in total_line
        assert "\x1b[1m" not in plain_line

    def test_columns_never_truncate(self) -> None:
        grid = build_rich_table(Table.build(["a", "b"], [["x", "y"]]))
        assert all(column.no_wrap for column in grid.columns)
        assert all(column.overflow == "fold" for column in grid.columns)


# ---------------------------------------------------------------------------
# Machine mode
# ---------------------------------------------------------------------------

class TestMachineMode:
    def test_empty_prints_nothing(self) -> None:
        assert _render(Empty(), machine_mode=True) == ""

    def test_table_payload_round_trips(self) -> None:
        columns = ["name", "n"]
        rows = [["a", 1], ["b", None]]
        output = _render(Table.build(columns, rows), machine_mode=True)
        assert json.loads(output) == {"headers": columns, "values": rows}

    def test_table_payload_is_pretty_printed(self) -> None:
        output = _render(Table.build(["a"], [[1]]), machine_mode=True)
        assert "\n  " in output

    def test_summary_not_in_payload(self) -> None:
        payload = machine_table_payload(Table.build(["a"], [[1]], [[2]]))
        assert payload == {"headers": ["a"], "values": [[1]]}

    def test_scalar_serialized(self) -> None:
        output = _render(Scalar({"k": [1, 2]}), machine_mode=True)
        assert json.loads(output) == {"k": [1, 2]}

    def test_string_scalar_is_json_string(self) -> None:
        assert json.loads(_render(Scalar("hi"), machine_mode=True)) == "hi"

    def test_custom_uses_serialize(self) -> None:
        custom = Custom(serialize=lambda: {"x": 1}, render=lambda console: None)
        assert json.loads(_render(custom, machine_mode=True)) == {"x": 1}

    def test_custom_serialize_failure_is_render_error(self) -> None:
        def boom() -> Any:
            raise ValueError("bad value")

        custom = Custom(serialize=boom, render=lambda console: None)
        with pytest.raises(RenderError, match="bad value") as exc_info:
            _render(custom, machine_mode=True)
        assert isinstance(exc_info.value.__cause__, ValueError)


# ---------------------------------------------------------------------------
# Human mode
# ---------------------------------------------------------------------------

class TestHumanMode:
    def test_empty_prints_nothing(self) -> None:
        assert _render(Empty(), machine_mode=False) == ""

    def test_string_scalar_verbatim(self) -> None:
        assert _render(Scalar("[not markup]"), machine_mode=False) == "[not markup]\n"

    def test_structured_scalar_is_block_yaml(self) -> None:
        output = _render(Scalar({"b": 1, "a": [1, 2]}), machine_mode=False)
        assert "{" not in output
        assert output.index("b:") < output.index("a:")
        assert yaml.safe_load(output) == {"b": 1, "a": [1, 2]}

    def test_tuple_scalar_dumped_as_list(self) -> None:
        output = _render(Scalar((1, 2)), machine_mode=False)
        assert yaml.safe_load(output) == [1, 2]

    def test_table_contains_headers_and_cells(self) -> None:
        output = _render(
            Table.build(["name", "count"], [["alpha", 3], ["beta", None]]),
            machine_mode=False,
        )
        for text in ("name", "count", "alpha", "beta", "3"):
            assert text in output

    def test_table_cells_not_markup(self) -> None:
        output = _render(Table.build(["a"], [["[red]x[/red]"]]), machine_mode=False)
        assert "[red]x[/red]" in output

    def test_long_cell_printed_in_full(self) -> None:
        address = "0x" + "ab" * 60
        note = "x" * 90
        table = Table.build(
            ["name", "address", "note", "state", "count"],
            [["node", address, note, "ready", 3]],
        )
        output = _render(table, machine_mode=False)
        assert address in output
        assert note in output
        assert "…" not in output

    def test_wide_table_headers_printed_in_full(self) -> None:
        columns = [f"column_{i}" for i in range(8)]
        cells = [f"value_number_{i}" for i in range(8)]
        output = _render(Table.build(columns, [cells]), machine_mode=False)
        for text in columns + cells:
            assert text in output
        assert "…" not in output

    def test_custom_uses_render(self) -> None:
        seen: list[object] = []
        custom = Custom(serialize=lambda: None, render=seen.append)
        assert _render(custom, machine_mode=False) == ""
        assert len(seen) == 1

    def test_custom_render_failure_is_render_error(self) -> None:
        def boom(console: object) -> None:
            raise OSError("closed")

        custom = Custom(serialize=lambda: None, render=boom)
        with pytest.raises(RenderError, match="closed"):
            _render(custom, machine_mode=False)

    def test_unknown_model_rejected(self) -> None:
        with pytest.raises(TypeError):
            ResponseRenderer(False, file=io.StringIO()).render("plain")  # type: ignore[arg-type]
