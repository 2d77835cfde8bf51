"""Yes/no confirmation gate shared by negotiation and business commands.

A :class:`PromptGate` is created once per invocation and threaded through
the session, the negotiator and the commands.  Its bypass flag starts
disarmed, so every confirmation asks the operator, and is armed at most
once, after a successful negotiation, from the ``--accept-any-prompt``
setting.
"""

from __future__ import annotations

from collections.abc import Callable

from golemctl.cli.console import console
from golemctl.cli.prompts import ask_yes_no


class PromptGate:
    """Confirmation gate with a set-once auto-accept bypass.

    Parameters
    ----------
    interactive:
        ``True`` inside an interactive shell; the bypass never applies there.
    ask:
        ``(message, default) -> bool`` question function.  Defaults to a
        questionary confirm prompt.
    notify:
        Writes accept/reject notes.  Defaults to the stderr console.
    """

    def __init__(
        self,
        interactive: bool = False,
        *,
        ask: Callable[[str, bool], bool] | None = None,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        self.interactive: bool = interactive
        self._ask = ask if ask is not None else ask_yes_no
        self._notify = notify if notify is not None else console.notice
        self._bypass: bool = False
        self._armed: bool = False

    @property
    def bypass(self) -> bool:
        return self._bypass

    def enable_bypass(self, bypass: bool) -> None:
        """Set the bypass flag.  May be called only once per gate."""
        if self._armed:
            raise RuntimeError("prompt gate bypass has already been set")
        self._bypass = bypass
        self._armed = True

    def confirm(
        self,
        message: str,
        accept_note: str | None = None,
        reject_note: str | None = None,
    ) -> bool:
        """Return the operator's answer to *message* (default yes).

        Auto-accepts without prompting when the bypass is set and the
        context is non-interactive.
        """
        if self._bypass and not self.interactive:
            return True

        enabled = self._ask(message, True)
        if enabled and accept_note is not None:
            self._notify(f"\t {accept_note}")
        elif not enabled and reject_note is not None:
            self._notify(f"\t {reject_note}")
        return enabled
