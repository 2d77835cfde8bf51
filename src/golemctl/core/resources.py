"""Core resources service — hardware preset inspection and updates.

This service backs the ``resources`` command group.  It talks to the node
through the injected :class:`~golemctl.core.protocols.RpcHandle` and
returns :mod:`~golemctl.core.response` models; it performs no rendering.

Guarantees
----------
* Requested values are validated against the node's limits before any
  mutating call is issued.
* RPC errors propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

from golemctl.core.models import MIN_HW_CAPS, HwCaps, HwCapsStatus, HwPreset
from golemctl.core.protocols import ConfirmationGate, Notifier, RpcHandle
from golemctl.core.response import ResponseModel, Scalar, Table
from golemctl.exceptions import ResourceValidationError

logger = logging.getLogger(__name__)

CUSTOM_PRESET: str = "custom"

SHOW_COLUMNS: tuple[str, ...] = ("", "active", "pending", "min", "max")

_DISK_TOLERANCE: float = 0.001


def _none_if_eq(value: Any, reference: Any) -> Any:
    """Return ``None`` when *value* equals *reference*, else *value*."""
    return None if value == reference else value


class ResourcesService:
    """Shows and updates the hardware resources shared by the node.

    Parameters
    ----------
    handle:
        A negotiated RPC handle.
    gate:
        Confirmation gate consulted before interrupting running tasks.
    notify:
        Writes progress notices to the human stream.
    """

    def __init__(
        self,
        handle: RpcHandle,
        gate: ConfirmationGate,
        notify: Notifier,
    ) -> None:
        self._handle = handle
        self._gate = gate
        self._notify = notify

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_presets(self) -> HwCapsStatus:
        """Collect active, pending and allowed capabilities from the node."""
        active = HwCaps(
            cpu_cores=int(self._handle.get_setting("num_cores")),
            memory=int(self._handle.get_setting("max_memory_size")),
            disk=float(self._handle.get_setting("max_resource_size")),
        )
        max_caps = HwCaps.from_dict(self._handle.get_hw_caps())
        pending = HwPreset.from_dict(self._handle.get_hw_preset(CUSTOM_PRESET))
        return HwCapsStatus(
            active=active,
            pending=pending.caps,
            min=MIN_HW_CAPS,
            max=max_caps,
        )

    def list_presets(self) -> ResponseModel:
        return Scalar(self._handle.get_hw_presets())

    def show(self) -> Table:
        """Tabulate active vs. pending vs. allowed capabilities."""
        status = self.get_presets()
        active, pending = status.active, status.pending
        rows = (
            [
                "cpu_cores",
                active.cpu_cores,
                _none_if_eq(pending.cpu_cores, active.cpu_cores),
                status.min.cpu_cores,
                status.max.cpu_cores,
            ],
            [
                "disk [kB]",
                int(active.disk),
                _none_if_eq(int(pending.disk), int(active.disk)),
                status.min.disk,
                status.max.disk,
            ],
            [
                "memory [kB]",
                active.memory,
                _none_if_eq(pending.memory, active.memory),
                status.min.memory,
                status.max.memory,
            ],
        )
        return Table.build(SHOW_COLUMNS, rows)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    @staticmethod
    def validate(
        status: HwCapsStatus,
        cpu_cores: int | None = None,
        disk: float | None = None,
        memory: int | None = None,
    ) -> HwCaps:
        """Merge requested values into the pending caps.

        Raises
        ------
        ResourceValidationError
            When a requested value lies outside ``min..max``.
        """
        low, high = status.min, status.max
        updates = status.pending

        if cpu_cores is not None:
            if not low.cpu_cores <= cpu_cores <= high.cpu_cores:
                raise ResourceValidationError(
                    f"cpu cores should be {high.cpu_cores} >= int >= {low.cpu_cores}",
                )
            updates = HwCaps(cpu_cores, updates.memory, updates.disk)

        if memory is not None:
            if not low.memory <= memory <= high.memory:
                raise ResourceValidationError(
                    f"memory should be {high.memory} >= int >= {low.memory}",
                )
            updates = HwCaps(updates.cpu_cores, memory, updates.disk)

        if disk is not None:
            logger.debug("disk=%s", disk)
            if not low.disk <= disk <= high.disk:
                raise ResourceValidationError(
                    f"disk should be {int(high.disk)} >= int >= {int(low.disk)}",
                )
            updates = HwCaps(updates.cpu_cores, updates.memory, disk)

        return updates

    def update(
        self,
        apply: bool,
        cpu_cores: int | None = None,
        disk: float | None = None,
        memory: int | None = None,
    ) -> ResponseModel:
        """Store a new ``custom`` preset and optionally activate it.

        Activation interrupts running tasks, so it is confirmed through
        the gate first.  Without activation the refreshed table is
        returned.
        """
        status = self.get_presets()
        updates = self.validate(status, cpu_cores=cpu_cores, disk=disk, memory=memory)

        self._handle.update_hw_preset(HwPreset(CUSTOM_PRESET, updates).to_dict())

        active = status.active
        changed = (
            active.cpu_cores != updates.cpu_cores
            or abs(active.disk - updates.disk) > _DISK_TOLERANCE
            or active.memory != updates.memory
        )

        if (
            changed
            and apply
            and self._gate.confirm(
                "Changing resources will interrupt performed tasks.\nAre you sure ?",
            )
        ):
            self._notify("Updating resources. please wait")
            return Scalar(self._handle.activate_hw_preset(CUSTOM_PRESET, True))

        if apply and not changed:
            self._notify("No changes detected")
        return self.show()
