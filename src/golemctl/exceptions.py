"""Custom exception hierarchy for golemctl.

Every user-visible error condition raised by golemctl itself inherits
from :class:`GolemCtlError`.  Exceptions raised by the RPC transport are
deliberately *not* wrapped: they propagate unchanged to the CLI error
boundary.

Hierarchy
---------
GolemCtlError
├── InvalidAddressError
├── AccountUnlockError
├── TermsRejectedError
├── ServerNotReadyError
├── ResourceValidationError
├── RenderError
└── EnvironmentError
    └── TransportConfigError
"""

from __future__ import annotations


class GolemCtlError(Exception):
    """Base exception for all golemctl errors.

    The CLI error boundary renders these as a clean one-line message
    followed by the optional :attr:`hint`.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class InvalidAddressError(GolemCtlError):
    """Raised when the ``--address`` value is not ``HOST:PORT``."""


# --- Session negotiation ---------------------------------------------------

class AccountUnlockError(GolemCtlError):
    """Raised when the remote account could not be unlocked."""


class TermsRejectedError(GolemCtlError):
    """Raised when the operator rejects the usage terms."""


class ServerNotReadyError(GolemCtlError):
    """Raised when the readiness subscription ends without an event."""


# --- Business commands -----------------------------------------------------

class ResourceValidationError(GolemCtlError):
    """Raised when a requested resource value is outside the allowed range."""


# --- Output ----------------------------------------------------------------

class RenderError(GolemCtlError):
    """Raised when a custom response fails to serialize or print itself."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(GolemCtlError):
    """Raised when a required runtime dependency is not available."""


class TransportConfigError(EnvironmentError):
    """Raised when no usable RPC transport connector is configured."""
