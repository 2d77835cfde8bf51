"""Core / service layer — session negotiation, response model, commands.

Rules
-----
* No ``print()`` calls and no terminal interaction.
* No imports from ``cli`` or ``infra``.
* Remote calls go through the :class:`~golemctl.core.protocols.RpcHandle`
  protocol only.
"""

from golemctl.core.models import HwCaps, HwCapsStatus, HwPreset, SessionParams
from golemctl.core.negotiator import SessionNegotiator, TermsChoice, TermsState
from golemctl.core.protocols import ConfirmationGate, Connector, RpcHandle
from golemctl.core.resources import ResourcesService
from golemctl.core.response import (
    Custom,
    Empty,
    ResponseModel,
    Scalar,
    Table,
    sort_by,
    with_summary,
)

__all__: list[str] = [
    "ConfirmationGate",
    "Connector",
    "Custom",
    "Empty",
    "HwCaps",
    "HwCapsStatus",
    "HwPreset",
    "ResourcesService",
    "ResponseModel",
    "RpcHandle",
    "Scalar",
    "SessionNegotiator",
    "SessionParams",
    "Table",
    "TermsChoice",
    "TermsState",
    "sort_by",
    "with_summary",
]
