"""Interactive terminal prompts (questionary-backed).

This module is responsible for:

* Asking plain yes/no confirmations.
* Asking the operator to show, accept or reject the node's usage terms.
* Asking for the account password and unlocking the node with it.

All terminal interaction goes through questionary; the negotiation logic
itself lives in :mod:`golemctl.core.negotiator`.
"""

from __future__ import annotations

from typing import Any

from golemctl.core.negotiator import TermsChoice
from golemctl.core.protocols import RpcHandle
from golemctl.exceptions import AccountUnlockError, EnvironmentError

MAX_PASSWORD_ATTEMPTS: int = 3


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def ask_yes_no(message: str, default: bool) -> bool:
    """Ask a yes/no question on the terminal.

    Raises
    ------
    KeyboardInterrupt
        If the operator cancels the prompt (questionary returns ``None``).
    """
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(message, default=default).ask()
    if answer is None:
        raise KeyboardInterrupt
    return answer


def prompt_terms_choice() -> TermsChoice:
    """Ask whether to show, accept or reject the terms.

    Raises
    ------
    KeyboardInterrupt
        If the operator cancels the prompt.
    """
    questionary = _import_questionary()

    choices = [
        questionary.Choice(title="Show terms", value=TermsChoice.SHOW),
        questionary.Choice(title="Accept", value=TermsChoice.ACCEPT),
        questionary.Choice(title="Reject", value=TermsChoice.REJECT),
    ]
    selected: TermsChoice | None = questionary.select(
        "Accept terms ?",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=True,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise KeyboardInterrupt
    return selected


def prompt_account_unlock(handle: RpcHandle) -> None:
    """Ask for the account password until the node accepts it.

    Raises
    ------
    AccountUnlockError
        After :data:`MAX_PASSWORD_ATTEMPTS` rejected passwords.
    KeyboardInterrupt
        If the operator cancels the prompt.
    """
    questionary = _import_questionary()

    for _ in range(MAX_PASSWORD_ATTEMPTS):
        password: str | None = questionary.password("Unlock account password:").ask()
        if password is None:
            raise KeyboardInterrupt
        if handle.set_password(password):
            return

    raise AccountUnlockError(
        "Account unlock failed: invalid password.",
        hint=f"The node rejected {MAX_PASSWORD_ATTEMPTS} passwords in a row.",
    )
