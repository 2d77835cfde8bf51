"""Allow ``python -m golemctl`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m golemctl`` behaves identically to the ``golemctl`` console
script.
"""

from __future__ import annotations

from golemctl.cli.app import cli

if __name__ == "__main__":
    cli()
