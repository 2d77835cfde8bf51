"""CLI console helpers with optional Rich support.

Two streams are kept apart: command payloads go to stdout, while notices,
prompts, logs and errors go to stderr.  Machine-mode consumers can then
parse stdout without notice noise.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from golemctl.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


def get_output_console(file: TextIO | None = None, width: int | None = None) -> Any:
	"""Create a Rich console for the payload stream (stdout by default).

	*width* overrides the detected terminal width (80 when not a tty).
	"""
	console_class = _load_rich_console_class()
	return console_class(file=file if file is not None else sys.stdout, width=width)


def escape_markup(text: object) -> str:
	"""Escape *text* for interpolation into a Rich markup string.

	Without Rich the proxy prints markup literally, so *text* is returned
	as-is.
	"""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return str(text)
	return escape(str(text))


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def notice(self, message: str) -> None:
		"""Print *message* verbatim, without interpreting Rich markup."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(message, file=sys.stderr)
			return
		rich_console.print(message, markup=False, highlight=False)


console = _ConsoleProxy()
