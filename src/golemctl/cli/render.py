"""Rendering of :mod:`~golemctl.core.response` models.

Two modes are supported:

* **machine mode** (``--json``) — pretty-printed JSON on stdout.
* **human mode** — plain strings verbatim, structured values as
  block-style YAML, tables as an aligned Rich grid.

Table layout (padding, blank rows, summary emphasis) is computed by the
pure :func:`layout_table_rows` so it can be tested without a terminal.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any, TextIO

from golemctl.cli.console import get_output_console
from golemctl.core.response import (
    Custom,
    Empty,
    ResponseModel,
    Scalar,
    Table,
    cell_text,
    is_positional,
)
from golemctl.exceptions import EnvironmentError, RenderError

_UNBOUNDED_WIDTH = 1_000_000


def _import_yaml() -> Any:
    """Import PyYAML lazily for human-mode structured dumps."""
    try:
        import yaml
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "PyYAML is not installed. Install with: pip install PyYAML",
        ) from exc
    return yaml


def _import_rich_table() -> tuple[type[Any], type[Any], Any]:
    """Import rich ``Table``, ``Text`` and the ``box`` module lazily."""
    try:
        from rich import box
        from rich.table import Table as RichTable
        from rich.text import Text
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return RichTable, Text, box


# ---------------------------------------------------------------------------
# Pure transforms
# ---------------------------------------------------------------------------

def to_plain(value: Any) -> Any:
    """Normalize *value* to JSON-compatible builtins (tuples become lists)."""
    return json.loads(json.dumps(value, default=str))


def to_json_text(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


@dataclass(frozen=True, slots=True)
class RenderedRow:
    """One printable table row."""

    cells: tuple[str, ...]
    emphasized: bool = False


def _row_cells(row: Any, width: int) -> tuple[str, ...]:
    cells = [cell_text(value) for value in row]
    cells.extend("" for _ in range(width - len(cells)))
    return tuple(cells)


def layout_table_rows(table: Table) -> list[RenderedRow]:
    """Compute the body rows of a human-mode table.

    Rules
    -----
    * Rows that are not positional sequences are skipped.
    * Short rows are padded with empty cells.
    * A table without data rows gets one row of empty cells.
    * A non-empty summary follows one blank separator row; its last
      printable row is emphasized.
    """
    width = len(table.columns)
    blank = RenderedRow(("",) * width)

    laid_out: list[RenderedRow] = []
    if not table.rows:
        laid_out.append(blank)
    laid_out.extend(
        RenderedRow(_row_cells(row, width)) for row in table.rows if is_positional(row)
    )

    if table.summary:
        laid_out.append(blank)
        summary = [row for row in table.summary if is_positional(row)]
        for idx, row in enumerate(summary):
            laid_out.append(
                RenderedRow(_row_cells(row, width), emphasized=idx == len(summary) - 1),
            )
    return laid_out


def machine_table_payload(table: Table) -> dict[str, Any]:
    """Return the ``{"headers": ..., "values": ...}`` machine-mode object."""
    return {"headers": list(table.columns), "values": to_plain(list(table.rows))}


def build_rich_table(table: Table) -> Any:
    """Build the human-mode Rich grid for *table*.

    Cells never wrap or truncate; the caller prints on a console wide
    enough for the whole grid.
    """
    table_class, text_class, box = _import_rich_table()
    grid = table_class(
        box=box.SQUARE,
        header_style="bold green",
        padding=(0, 2),
    )
    for column in table.columns:
        grid.add_column(column, no_wrap=True, overflow="fold")
    for row in layout_table_rows(table):
        grid.add_row(
            *(text_class(cell) for cell in row.cells),
            style="bold" if row.emphasized else None,
        )
    return grid


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

class ResponseRenderer:
    """Writes response models to the payload stream.

    Parameters
    ----------
    machine_mode:
        Emit JSON instead of human-formatted output.
    file:
        Destination stream.  Defaults to ``sys.stdout`` at render time.
    """

    def __init__(self, machine_mode: bool = False, file: TextIO | None = None) -> None:
        self.machine_mode: bool = machine_mode
        self._file = file

    @property
    def file(self) -> TextIO:
        return self._file if self._file is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.file.write(text if text.endswith("\n") else text + "\n")
        self.file.flush()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def render(self, model: ResponseModel) -> None:
        """Render *model*; :class:`Empty` produces no output."""
        if isinstance(model, Empty):
            return
        if isinstance(model, Scalar):
            self._render_scalar(model.value)
        elif isinstance(model, Table):
            self._render_table(model)
        elif isinstance(model, Custom):
            self._render_custom(model)
        else:
            raise TypeError(f"unsupported response model: {type(model).__name__}")

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    def _render_scalar(self, value: Any) -> None:
        if self.machine_mode:
            self._write(to_json_text(value))
        elif isinstance(value, str):
            self._write(value)
        else:
            yaml = _import_yaml()
            self._write(
                yaml.safe_dump(to_plain(value), default_flow_style=False, sort_keys=False),
            )

    def _render_table(self, table: Table) -> None:
        if self.machine_mode:
            self._write(to_json_text(machine_table_payload(table)))
            return

        grid = build_rich_table(table)
        out = get_output_console(self.file)
        # Measurements are capped at max_width; measure unbounded.
        needed = out.measure(grid, options=out.options.update_width(_UNBOUNDED_WIDTH)).maximum
        if needed > out.width:
            out = get_output_console(self.file, width=needed)
        out.print(grid)

    def _render_custom(self, model: Custom) -> None:
        if self.machine_mode:
            try:
                value = model.serialize()
            except Exception as exc:
                raise RenderError(f"Failed to serialize response: {exc}") from exc
            self._write(to_json_text(value))
            return

        out = get_output_console(self.file)
        try:
            model.render(out)
        except Exception as exc:
            raise RenderError(f"Failed to print response: {exc}") from exc
