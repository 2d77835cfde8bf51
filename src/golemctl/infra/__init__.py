"""Infrastructure layer — integration with the external RPC transport.

golemctl ships no transport of its own.  A connector callable is located
by import path and must satisfy :class:`~golemctl.core.protocols.Connector`.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
"""

from golemctl.infra.transport import TRANSPORT_ENV_VAR, load_connector, resolve_transport

__all__: list[str] = [
    "TRANSPORT_ENV_VAR",
    "load_connector",
    "resolve_transport",
]
