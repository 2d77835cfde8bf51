"""CLI application entry point and command routing for golemctl.

This module is the **sole error boundary** for the entire application.
It catches :class:`~golemctl.exceptions.GolemCtlError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages on stderr and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — commands are delegated to the core
  services through a negotiated :class:`~golemctl.cli.session.CliSession`.
* Payloads go to stdout; notices and errors go to stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Mapping
from pathlib import Path

from golemctl.cli import exit_codes
from golemctl.cli.console import console, escape_markup
from golemctl.core.models import SessionParams
from golemctl.core.protocols import Connector, RpcHandle
from golemctl.core.response import ResponseModel
from golemctl.exceptions import GolemCtlError, InvalidAddressError
from golemctl.version import __version__

DEFAULT_ADDRESS: str = "127.0.0.1:61000"
DEFAULT_DATA_DIR: str = "~/.local/share/golem/default"
NETWORKS: tuple[str, ...] = ("mainnet", "testnet")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``golemctl resources show [--sort COLUMN]``
    * ``golemctl resources update [--cores N] [--disk KB] [--memory KB] [--apply]``
    * ``golemctl --version``
    """
    parser = argparse.ArgumentParser(
        prog="golemctl",
        description="Remote control for a Golem node.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-a",
        "--address",
        default=DEFAULT_ADDRESS,
        metavar="HOST:PORT",
        help=f"RPC address of the node (default: {DEFAULT_ADDRESS}).",
    )
    parser.add_argument(
        "-d",
        "--datadir",
        type=Path,
        default=None,
        help=f"Node data directory (default: {DEFAULT_DATA_DIR}).",
    )
    parser.add_argument("--net", choices=NETWORKS, default=None, help="Network to use.")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON.",
    )
    parser.add_argument(
        "-y",
        "--accept-any-prompt",
        action="store_true",
        help="Answer yes to confirmations after the session is ready.",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Interactive context; confirmations are always asked.",
    )
    parser.add_argument(
        "--transport",
        default=None,
        metavar="MODULE:ATTR",
        help="Connector callable for the RPC transport "
        "(default: $GOLEMCTL_TRANSPORT).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    resources = commands.add_parser("resources", help="Manage shared hardware resources.")
    sections = resources.add_subparsers(dest="section", metavar="{show,update}")
    sections.add_parser("_list")
    show = sections.add_parser("show", help="Display shared resources info.")
    show.add_argument("--sort", default=None, metavar="COLUMN", help="Sort rows by COLUMN.")
    update = sections.add_parser("update", help="Change your provider resources.")
    update.add_argument("--cores", type=int, default=None, dest="cores")
    update.add_argument("--disk", type=float, default=None, help="Disk space in kB.")
    update.add_argument("--memory", type=int, default=None, help="Memory in kB.")
    update.add_argument(
        "--apply",
        action="store_true",
        help="Activate the new preset immediately.",
    )
    resources.set_defaults(help_parser=resources)
    return parser


# ---------------------------------------------------------------------------
# Session construction
# ---------------------------------------------------------------------------

def parse_address(value: str) -> tuple[str, int]:
    """Split ``HOST:PORT`` into its parts.

    Raises
    ------
    InvalidAddressError
        When the port is missing, not a number or out of range.
    """
    host, sep, port_text = value.rpartition(":")
    if not sep or not host or not port_text.isdigit():
        raise InvalidAddressError(
            f"Invalid RPC address {value!r}.",
            hint="Use HOST:PORT, e.g. 127.0.0.1:61000.",
        )
    port = int(port_text)
    if not 0 < port < 65536:
        raise InvalidAddressError(f"Invalid RPC port {port}: expected 1-65535.")
    return host, port


def session_params(args: argparse.Namespace) -> SessionParams:
    """Build :class:`SessionParams` from parsed arguments."""
    data_dir = args.datadir if args.datadir is not None else Path(DEFAULT_DATA_DIR)
    return SessionParams(
        rpc_address=parse_address(args.address),
        data_dir=data_dir.expanduser(),
        net=args.net,
        json_output=args.json,
        accept_any_prompt=args.accept_any_prompt,
        interactive=args.interactive,
    )


def _resolve_connector(
    args: argparse.Namespace,
    environ: Mapping[str, str] | None,
) -> Connector:
    from golemctl.infra.transport import load_connector, resolve_transport

    return load_connector(resolve_transport(args.transport, environ))


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_resources(args: argparse.Namespace, connector: Connector) -> int:
    """Dispatch the ``resources`` command group."""
    from golemctl.cli.session import CliSession
    from golemctl.core.resources import ResourcesService
    from golemctl.core.response import sort_by

    session = CliSession(session_params(args), connector)

    def command(handle: RpcHandle) -> ResponseModel:
        service = ResourcesService(handle, session.gate, session.message)
        if args.section == "_list":
            return service.list_presets()
        if args.section == "update":
            return service.update(
                args.apply,
                cpu_cores=args.cores,
                disk=args.disk,
                memory=args.memory,
            )
        return sort_by(service.show(), args.sort)

    session.run(command)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    connector: Connector | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the golemctl CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    connector:
        RPC connector to use instead of the configured transport.
    environ:
        Environment consulted for the transport (default ``os.environ``).

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "resources" and args.section is None:
        args.help_parser.print_help()
        return exit_codes.SUCCESS

    from golemctl.cli.logging_setup import configure_logging

    configure_logging(args.verbose)

    if connector is None:
        connector = _resolve_connector(args, environ)

    return _handle_resources(args, connector)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except GolemCtlError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Error:[/bold red] "
            f"{type(exc).__name__}: {escape_markup(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
