"""Shared pytest fixtures and configuration for the golemctl test suite.

Guidelines
----------
* No network access in any test — the RPC transport is replaced by
  :class:`FakeHandle`.
* questionary is mocked at the prompt boundary; no terminal interaction.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def _restore_golemctl_logger() -> Iterator[None]:
    """Undo the logger changes ``main()`` makes through ``configure_logging``."""
    logger = logging.getLogger("golemctl")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


class FakeHandle:
    """In-memory stand-in for a connected node.

    Every RPC method records its name and arguments in :attr:`calls`.
    """

    def __init__(
        self,
        *,
        unlocked: bool = True,
        terms_accepted: bool = True,
        ready_events: int = 1,
        settings: dict[str, Any] | None = None,
        hw_caps: dict[str, Any] | None = None,
        custom_caps: dict[str, Any] | None = None,
        password: str = "secret",
    ) -> None:
        self.unlocked = unlocked
        self.terms_accepted = terms_accepted
        self.ready_events = ready_events
        self.password = password
        self.settings: dict[str, Any] = settings or {
            "num_cores": 4,
            "max_memory_size": 4_194_304,
            "max_resource_size": 10_485_760.0,
        }
        self.hw_caps: dict[str, Any] = hw_caps or {
            "cpu_cores": 8,
            "memory": 16_777_216,
            "disk": 104_857_600.0,
        }
        self.custom_caps: dict[str, Any] = custom_caps or {
            "cpu_cores": 4,
            "memory": 4_194_304,
            "disk": 10_485_760.0,
        }
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    # -- negotiation surface -------------------------------------------

    def is_account_unlocked(self) -> bool:
        self._record("is_account_unlocked")
        return self.unlocked

    def set_password(self, password: str) -> bool:
        self._record("set_password", password)
        if password == self.password:
            self.unlocked = True
            return True
        return False

    def are_terms_accepted(self) -> bool:
        self._record("are_terms_accepted")
        return self.terms_accepted

    def get_terms_text(self) -> str:
        self._record("get_terms_text")
        return "TERMS OF USE"

    def accept_terms(self, enable_monitor: bool, enable_diagnostics: bool) -> None:
        self._record("accept_terms", enable_monitor, enable_diagnostics)
        self.terms_accepted = True

    def subscribe(self, topic: str) -> Iterator[Any]:
        self._record("subscribe", topic)
        return iter([{"topic": topic}] * self.ready_events)

    # -- resources surface ---------------------------------------------

    def get_setting(self, name: str) -> Any:
        self._record("get_setting", name)
        return self.settings[name]

    def get_hw_caps(self) -> dict[str, Any]:
        self._record("get_hw_caps")
        return dict(self.hw_caps)

    def get_hw_preset(self, name: str) -> dict[str, Any]:
        self._record("get_hw_preset", name)
        return {"name": name, "caps": dict(self.custom_caps)}

    def get_hw_presets(self) -> list[Any]:
        self._record("get_hw_presets")
        return [{"name": "custom", "caps": dict(self.custom_caps)}]

    def update_hw_preset(self, preset: dict[str, Any]) -> None:
        self._record("update_hw_preset", preset)
        self.custom_caps = dict(preset["caps"])

    def activate_hw_preset(self, name: str, run_benchmarks: bool) -> bool:
        self._record("activate_hw_preset", name, run_benchmarks)
        return True


class FakeGate:
    """Confirmation gate answering from a fixed list of replies."""

    def __init__(self, *answers: bool) -> None:
        self._answers = list(answers)
        self.asked: list[str] = []
        self.bypass: bool | None = None

    def confirm(
        self,
        message: str,
        accept_note: str | None = None,
        reject_note: str | None = None,
    ) -> bool:
        self.asked.append(message)
        return self._answers.pop(0) if self._answers else True

    def enable_bypass(self, bypass: bool) -> None:
        self.bypass = bypass


@pytest.fixture
def handle() -> FakeHandle:
    return FakeHandle()


@pytest.fixture
def notices() -> list[str]:
    return []
