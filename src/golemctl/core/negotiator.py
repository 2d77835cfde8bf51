"""Session negotiation — brings a freshly connected node to a usable state.

Before any business command may run, the node's account must be
unlocked and its usage terms accepted.  Either action makes the node
reload its state, after which it publishes a one-shot readiness event.

Sequence
--------
1. Unlock the account when it is locked.
2. Run the terms show/accept/reject state machine when the terms are not
   accepted, then collect the monitor/diagnostics opt-ins.
3. Block on the readiness subscription when either step changed state.
4. Arm the confirmation gate's auto-accept bypass.

The negotiator holds no I/O of its own: prompts, notices and the unlock
flow are injected collaborators.
"""

from __future__ import annotations

import enum
import logging

from golemctl.core.protocols import (
    AccountUnlocker,
    ConfirmationGate,
    Notifier,
    RpcHandle,
    TermsPrompter,
)
from golemctl.exceptions import ServerNotReadyError, TermsRejectedError

logger = logging.getLogger(__name__)

READY_TOPIC: str = "golem.rpc_ready"
"""Event topic published by the node once it has (re)loaded its state."""


# ---------------------------------------------------------------------------
# Terms acceptance state machine
# ---------------------------------------------------------------------------

class TermsChoice(enum.Enum):
    """One operator answer to the terms prompt."""

    SHOW = "show"
    ACCEPT = "accept"
    REJECT = "reject"


class TermsState(enum.Enum):
    AWAIT_CHOICE = "await_choice"
    SHOWING_TERMS = "showing_terms"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (TermsState.ACCEPTED, TermsState.REJECTED)


_CHOICE_TARGETS: dict[TermsChoice, TermsState] = {
    TermsChoice.SHOW: TermsState.SHOWING_TERMS,
    TermsChoice.ACCEPT: TermsState.ACCEPTED,
    TermsChoice.REJECT: TermsState.REJECTED,
}


def next_terms_state(state: TermsState, choice: TermsChoice) -> TermsState:
    """Transition function of the terms state machine.

    Choices are only consumed while awaiting one; ``SHOWING_TERMS`` returns
    to ``AWAIT_CHOICE`` once the text has been displayed.

    Raises
    ------
    ValueError
        When *state* does not accept a choice.
    """
    if state is not TermsState.AWAIT_CHOICE:
        raise ValueError(f"terms state {state.value!r} does not accept a choice")
    return _CHOICE_TARGETS[choice]


# ---------------------------------------------------------------------------
# Negotiator
# ---------------------------------------------------------------------------

class SessionNegotiator:
    """Runs the unlock, terms and readiness sequence for one invocation.

    Parameters
    ----------
    gate:
        Confirmation gate used for the opt-in questions and armed at the end.
    prompt_terms:
        Returns the operator's next :class:`TermsChoice`.
    unlock_account:
        External unlock flow, run when the account is locked.
    notify:
        Writes notices to the human stream.
    accept_any_prompt:
        Value the gate's bypass flag is set to after success.
    """

    def __init__(
        self,
        gate: ConfirmationGate,
        prompt_terms: TermsPrompter,
        unlock_account: AccountUnlocker,
        notify: Notifier,
        *,
        accept_any_prompt: bool = False,
    ) -> None:
        self._gate = gate
        self._prompt_terms = prompt_terms
        self._unlock_account = unlock_account
        self._notify = notify
        self._accept_any_prompt = accept_any_prompt

    def negotiate(self, handle: RpcHandle) -> RpcHandle:
        """Return *handle* once it is safe for business calls.

        Raises
        ------
        TermsRejectedError
            When the operator rejects the terms.
        ServerNotReadyError
            When the readiness subscription ends without an event.
        """
        wait_for_start = False

        if not handle.is_account_unlocked():
            self._notify("Account locked")
            self._unlock_account(handle)
            wait_for_start = True

        if not handle.are_terms_accepted():
            self._notify("Terms not accepted")
            self._run_terms_loop(handle)
            enable_monitor = self._gate.confirm(
                "Enable monitor",
                "monitor will be ENABLED",
                "monitor will be DISABLED",
            )
            enable_diagnostics = self._gate.confirm(
                "Enable talkback",
                "talkback will be ENABLED",
                "talkback will be DISABLED",
            )
            logger.info(
                "Accepting terms (monitor=%s, talkback=%s)",
                enable_monitor,
                enable_diagnostics,
            )
            handle.accept_terms(enable_monitor, enable_diagnostics)
            wait_for_start = True

        if wait_for_start:
            self.wait_for_server(handle)

        self._gate.enable_bypass(self._accept_any_prompt)
        return handle

    def _run_terms_loop(self, handle: RpcHandle) -> None:
        state = TermsState.AWAIT_CHOICE
        while not state.is_terminal:
            state = next_terms_state(state, self._prompt_terms())
            if state is TermsState.SHOWING_TERMS:
                self._notify(handle.get_terms_text())
                state = TermsState.AWAIT_CHOICE

        if state is TermsState.REJECTED:
            raise TermsRejectedError(
                "terms not accepted",
                hint="The node cannot be used until its terms are accepted.",
            )

    def wait_for_server(self, handle: RpcHandle) -> None:
        """Block until the node publishes exactly one readiness event.

        The subscription is closed (when it supports ``close()``) once the
        event arrives or the stream fails.
        """
        self._notify("Waiting for server start")
        events = iter(handle.subscribe(READY_TOPIC))
        try:
            next(events)
        except StopIteration:
            raise ServerNotReadyError(
                "subscription closed before the node reported readiness",
            ) from None
        finally:
            close = getattr(events, "close", None)
            if callable(close):
                close()
        logger.debug("Received %s event", READY_TOPIC)
