"""Per-invocation CLI session.

:class:`CliSession` owns the connection parameters, the prompt gate and
the output mode.  A command runs as::

    session = CliSession(params, connector)
    handle = session.negotiate(session.connect())
    session.output(command(handle))

or in one step with :meth:`CliSession.run`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from golemctl.cli.console import console
from golemctl.cli.prompt_gate import PromptGate
from golemctl.cli.prompts import prompt_account_unlock, prompt_terms_choice
from golemctl.cli.render import ResponseRenderer
from golemctl.core.models import SessionParams
from golemctl.core.negotiator import SessionNegotiator
from golemctl.core.protocols import AccountUnlocker, Connector, RpcHandle, TermsPrompter
from golemctl.core.response import ResponseModel

logger = logging.getLogger(__name__)


class CliSession:
    """Connects to the node, negotiates the session and renders results.

    Parameters
    ----------
    params:
        Resolved session parameters.
    connector:
        Opens the RPC session; see :class:`~golemctl.core.protocols.Connector`.
    gate:
        Confirmation gate.  A new one honouring ``params.interactive`` is
        created when omitted.
    prompt_terms, unlock_account:
        Negotiation prompts.  Default to the questionary implementations.
    renderer:
        Output renderer.  Defaults to stdout in the mode given by
        ``params.json_output``.
    """

    def __init__(
        self,
        params: SessionParams,
        connector: Connector,
        *,
        gate: PromptGate | None = None,
        prompt_terms: TermsPrompter | None = None,
        unlock_account: AccountUnlocker | None = None,
        renderer: ResponseRenderer | None = None,
    ) -> None:
        self.params: SessionParams = params
        self._connector = connector
        self.gate: PromptGate = (
            gate if gate is not None else PromptGate(params.interactive, notify=self.message)
        )
        self._prompt_terms = prompt_terms if prompt_terms is not None else prompt_terms_choice
        self._unlock_account = (
            unlock_account if unlock_account is not None else prompt_account_unlock
        )
        self.renderer: ResponseRenderer = (
            renderer if renderer is not None else ResponseRenderer(params.json_output)
        )

    def connect(self) -> RpcHandle:
        """Open the RPC session.  Transport errors propagate unchanged."""
        host, port = self.params.rpc_address
        logger.info("Connecting to %s:%d (net=%s)", host, port, self.params.net or "default")
        return self._connector(self.params.data_dir, self.params.net, self.params.rpc_address)

    def negotiate(self, handle: RpcHandle) -> RpcHandle:
        """Unlock, accept terms and wait for readiness as needed."""
        negotiator = SessionNegotiator(
            self.gate,
            self._prompt_terms,
            self._unlock_account,
            self.message,
            accept_any_prompt=self.params.accept_any_prompt,
        )
        return negotiator.negotiate(handle)

    def output(self, response: ResponseModel) -> None:
        self.renderer.render(response)

    def message(self, text: str) -> None:
        """Write a notice to stderr."""
        console.notice(text)

    def run(self, command: Callable[[RpcHandle], ResponseModel]) -> None:
        """Connect, negotiate, execute *command* and render its result."""
        handle = self.negotiate(self.connect())
        self.output(command(handle))
