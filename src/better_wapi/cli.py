"""Command-line entry point for running a single challenge action."""

import argparse
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from pydantic import ValidationError

from better_wapi._logging import configure_logging, get_logger
from better_wapi.exceptions import StartupConfigError, WebhookError
from better_wapi.models import ChallengeRequest
from better_wapi.secrets.kubernetes import load_cluster_configuration
from better_wapi.settings import WebhookSettings
from better_wapi.solver import BetterWapiSolver

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="better-wapi-webhook",
        description="Present or clean up a DNS-01 challenge through better-wapi.",
    )
    parser.add_argument("action", choices=["present", "cleanup"])
    parser.add_argument(
        "--request",
        type=Path,
        help="ChallengeRequest JSON document (default: read stdin)",
    )
    parser.add_argument(
        "--kubeconfig",
        help="kubeconfig file to use instead of the in-cluster service account",
    )
    return parser


def main(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    """Run one present or cleanup action.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).
        environ: Environment for settings (defaults to os.environ).

    Returns:
        Process exit code: 0 on success, 1 on solver failure.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = WebhookSettings.from_env(environ)
    except StartupConfigError as e:
        print(f"better-wapi-webhook: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    try:
        source = args.request.read_text() if args.request else sys.stdin.read()
    except OSError as e:
        logger.error("Cannot read challenge request", extra={"error": str(e)})
        return 1

    try:
        request = ChallengeRequest.model_validate_json(source)
    except ValidationError as e:
        logger.error("Invalid challenge request", extra={"error": str(e)})
        return 1

    solver = BetterWapiSolver(settings)
    try:
        solver.initialize(load_cluster_configuration(args.kubeconfig))
        if args.action == "present":
            solver.present(request)
        else:
            solver.cleanup(request)
    except WebhookError as e:
        logger.error("Challenge action failed: %s", e)
        return 1
    finally:
        solver.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
