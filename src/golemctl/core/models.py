"""Domain models for golemctl.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and conversion from/to the plain dicts
exchanged with the RPC transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


# ---------------------------------------------------------------------------
# Session parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SessionParams:
    """Connection and output settings for a single command invocation."""

    rpc_address: tuple[str, int]
    """Remote ``(host, port)`` of the node's RPC endpoint."""

    data_dir: Path
    """Local state directory of the node."""

    net: str | None = None
    """Network selection (``mainnet`` / ``testnet``), or ``None`` for default."""

    json_output: bool = False
    """Render results in machine mode (JSON on stdout)."""

    accept_any_prompt: bool = False
    """Auto-accept confirmations once negotiation has succeeded."""

    interactive: bool = False
    """Interactive shell context; disables the auto-accept bypass."""


# ---------------------------------------------------------------------------
# Hardware presets
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HwCaps:
    """Hardware capabilities shared with the network."""

    cpu_cores: int
    memory: int
    """Memory in kB."""

    disk: float
    """Disk space in kB."""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HwCaps:
        return cls(
            cpu_cores=int(raw["cpu_cores"]),
            memory=int(raw["memory"]),
            disk=float(raw["disk"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"cpu_cores": self.cpu_cores, "memory": self.memory, "disk": self.disk}


@dataclass(frozen=True, slots=True)
class HwPreset:
    """A named set of hardware capabilities stored by the node."""

    name: str
    caps: HwCaps

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HwPreset:
        return cls(name=str(raw["name"]), caps=HwCaps.from_dict(raw["caps"]))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "caps": self.caps.to_dict()}


@dataclass(frozen=True, slots=True)
class HwCapsStatus:
    """Active, pending and allowed hardware capabilities of the node."""

    active: HwCaps
    pending: HwCaps
    min: HwCaps
    max: HwCaps


MIN_HW_CAPS: HwCaps = HwCaps(cpu_cores=1, memory=1_048_576, disk=1_048_576.0)
"""Lower bound accepted by the node for every preset."""
