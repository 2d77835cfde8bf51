"""Protocols (interfaces) consumed by the core layer.

These define the contracts that the RPC transport and the interactive CLI
layer must satisfy.  Core code depends ONLY on these protocols — never on
a concrete transport or prompt library.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from golemctl.core.negotiator import TermsChoice


class RpcHandle(Protocol):
    """Capability surface of a connected node.

    Transport implementations may raise their own exceptions from any
    method; golemctl propagates them unchanged.
    """

    def is_account_unlocked(self) -> bool: ...

    def set_password(self, password: str) -> bool:
        """Unlock (or create) the account; ``False`` on a wrong password."""
        ...

    def are_terms_accepted(self) -> bool: ...

    def get_terms_text(self) -> str: ...

    def accept_terms(self, enable_monitor: bool, enable_diagnostics: bool) -> Any: ...

    def subscribe(self, topic: str) -> Iterable[Any]:
        """Return a lazy, blocking sequence of events published on *topic*."""
        ...

    def get_setting(self, name: str) -> Any: ...

    def get_hw_caps(self) -> dict[str, Any]: ...

    def get_hw_preset(self, name: str) -> dict[str, Any]: ...

    def get_hw_presets(self) -> list[Any]: ...

    def update_hw_preset(self, preset: dict[str, Any]) -> Any: ...

    def activate_hw_preset(self, name: str, run_benchmarks: bool) -> Any: ...


class Connector(Protocol):
    """Callable that opens an RPC session to a node."""

    def __call__(
        self,
        data_dir: Path,
        net: str | None,
        address: tuple[str, int],
    ) -> RpcHandle: ...


class ConfirmationGate(Protocol):
    """Yes/no confirmation with a set-once auto-accept bypass."""

    def confirm(
        self,
        message: str,
        accept_note: str | None = None,
        reject_note: str | None = None,
    ) -> bool: ...

    def enable_bypass(self, bypass: bool) -> None: ...


class TermsPrompter(Protocol):
    """Asks the operator to show, accept or reject the usage terms."""

    def __call__(self) -> TermsChoice: ...


class AccountUnlocker(Protocol):
    """Runs the interactive unlock flow against *handle*."""

    def __call__(self, handle: RpcHandle) -> None: ...


class Notifier(Protocol):
    """Writes a human notice to the secondary (stderr) stream."""

    def __call__(self, message: str) -> None: ...
