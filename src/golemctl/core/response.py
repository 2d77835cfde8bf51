"""Generic command response model.

Every command maps its result into exactly one of four shapes:

* :class:`Empty`  — nothing to print.
* :class:`Scalar` — an arbitrary structured value.
* :class:`Table`  — columns, positional rows and optional summary rows.
* :class:`Custom` — a value carrying its own serialize/render capabilities.

The union is closed; renderers match on it exhaustively.  Every function
in this module is pure.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Empty:
    """No output in either rendering mode."""


@dataclass(frozen=True, slots=True)
class Scalar:
    """A single structured value (dict, list, str, number, bool or ``None``)."""

    value: Any

    @classmethod
    def of(cls, obj: Any) -> Scalar:
        """Wrap *obj*, converting dataclass instances to plain dicts."""
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return cls(dataclasses.asdict(obj))
        return cls(obj)


@dataclass(frozen=True, slots=True)
class Table:
    """Tabular result.

    ``rows`` and ``summary`` hold positional sequences aligned with
    ``columns``.  Summary rows are printed after a blank separator; the
    last one is emphasized as a grand total.
    """

    columns: tuple[str, ...]
    rows: tuple[Any, ...] = ()
    summary: tuple[Any, ...] = ()

    @classmethod
    def build(
        cls,
        columns: Sequence[str],
        rows: Sequence[Any] = (),
        summary: Sequence[Any] = (),
    ) -> Table:
        return cls(columns=tuple(columns), rows=tuple(rows), summary=tuple(summary))


@dataclass(frozen=True, slots=True)
class Custom:
    """A value that knows how to present itself.

    Parameters
    ----------
    serialize:
        Returns a JSON-serializable value for machine mode.
    render:
        Prints the human form on the rich console it is given.
    """

    serialize: Callable[[], Any]
    render: Callable[[Any], None] = field(repr=False)


ResponseModel = Union[Empty, Scalar, Table, Custom]


# ---------------------------------------------------------------------------
# Cell helpers
# ---------------------------------------------------------------------------

def is_positional(row: object) -> bool:
    """Return ``True`` when *row* can be read as a sequence of cells."""
    return isinstance(row, (list, tuple))


def cell_text(value: object) -> str:
    """Default text form of a cell.

    ``None`` becomes the empty string, strings are kept verbatim and every
    other value uses its JSON text (``true``, ``1.5``, ``[1, 2]``).
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


# ---------------------------------------------------------------------------
# Table operations
# ---------------------------------------------------------------------------

def sort_by(table: Table, key: str | None) -> Table:
    """Return *table* with rows stably sorted by the column named *key*.

    The table is returned unchanged when *key* is ``None`` or names no
    column.  Rows that are not positional or are too short to hold the
    key cell sort after all other rows, keeping their relative order.
    """
    if key is None or key not in table.columns:
        return table
    idx = table.columns.index(key)

    def _row_key(row: Any) -> tuple[int, str]:
        if not is_positional(row) or len(row) <= idx:
            return (1, "")
        return (0, cell_text(row[idx]))

    return dataclasses.replace(table, rows=tuple(sorted(table.rows, key=_row_key)))


def with_summary(table: Table, summary: Sequence[Any]) -> Table:
    """Return a copy of *table* carrying *summary* as its trailing rows."""
    return dataclasses.replace(table, summary=tuple(summary))
