"""Resolution of the RPC transport connector.

The transport is configured as a ``module:attribute`` import path, either
with ``--transport`` or via the :data:`TRANSPORT_ENV_VAR` environment
variable.  The attribute must be a callable satisfying
:class:`~golemctl.core.protocols.Connector`.
"""

from __future__ import annotations

import importlib
import logging
import os
from collections.abc import Mapping

from golemctl.core.protocols import Connector
from golemctl.exceptions import TransportConfigError

logger = logging.getLogger(__name__)

TRANSPORT_ENV_VAR: str = "GOLEMCTL_TRANSPORT"

_HINT: str = (
    f"Pass --transport MODULE:ATTR or set {TRANSPORT_ENV_VAR} to a callable "
    "that connects to the node."
)


def resolve_transport(
    explicit: str | None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the configured import path, preferring *explicit*.

    Raises
    ------
    TransportConfigError
        When neither *explicit* nor the environment names a transport.
    """
    env = os.environ if environ is None else environ
    target = explicit or env.get(TRANSPORT_ENV_VAR, "").strip()
    if not target:
        raise TransportConfigError("No RPC transport configured.", hint=_HINT)
    return target


def load_connector(target: str) -> Connector:
    """Import and return the connector named by ``module:attribute``.

    Raises
    ------
    TransportConfigError
        When *target* is malformed, the module cannot be imported or the
        attribute is missing or not callable.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TransportConfigError(
            f"Invalid transport {target!r}: expected MODULE:ATTR.",
            hint=_HINT,
        )

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise TransportConfigError(
            f"Cannot import transport module {module_name!r}: {exc}",
            hint="Install the package that provides the transport.",
        ) from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise TransportConfigError(
                f"Transport module {module_name!r} has no attribute {attr_path!r}.",
                hint=_HINT,
            ) from exc

    if not callable(obj):
        raise TransportConfigError(f"Transport {target!r} is not callable.", hint=_HINT)

    logger.debug("Loaded RPC transport %s", target)
    return obj  # type: ignore[return-value]
