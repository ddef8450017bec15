from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

import kopf
from dotenv import load_dotenv

from jsm_operator.app import close_default_gateway, reconcile_service, reconcile_team
from jsm_operator.config import ConfigurationError, configure_logging, get_operator_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile JSMService and JSMTeam resources against the service catalog"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Start the operator")
    run.add_argument(
        "--namespace",
        type=str,
        help="Namespace to watch (defaults to WATCH_NAMESPACE, blank means cluster-wide)",
    )

    service = subparsers.add_parser("reconcile-service", help="Reconcile one JSMService once")
    service.add_argument("name", type=str, help="Name of the JSMService resource")
    service.add_argument("--namespace", type=str, default="default", help="Resource namespace")

    team = subparsers.add_parser("reconcile-team", help="Reconcile one JSMTeam once")
    team.add_argument("name", type=str, help="Name of the JSMTeam resource")
    team.add_argument("--namespace", type=str, default="default", help="Resource namespace")

    return parser.parse_args(list(argv))


def _run_operator(namespace: str | None) -> None:
    import jsm_operator.ui.handlers  # noqa: F401, PLC0415  # registers the kopf handlers

    watch_namespace = namespace if namespace is not None else get_operator_config().watch_namespace
    if watch_namespace:
        kopf.run(standalone=True, namespaces=[watch_namespace])
    else:
        kopf.run(standalone=True, clusterwide=True)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "run":
            _run_operator(parsed_args.namespace)
        elif parsed_args.command == "reconcile-service":
            result = reconcile_service(parsed_args.namespace, parsed_args.name)
            log.info("Result: %s", result.action)
        elif parsed_args.command == "reconcile-team":
            result = reconcile_team(parsed_args.namespace, parsed_args.name)
            log.info("Result: %s", result.action)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ConfigurationError, ValueError):
        log.exception("Invalid configuration or resource")
        sys.exit(2)
    except Exception:
        log.exception("Reconcile failed")
        sys.exit(1)
    finally:
        close_default_gateway()


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
