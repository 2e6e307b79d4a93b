from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from kubedeploy.app import deploy_from_environment
from kubedeploy.config import configure_logging
from kubedeploy.domain.model import DEPLOYMENT, DEPLOYMENT_CONFIG, OPENSHIFT, DeploymentTarget

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "target"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Apply a rendered Kubernetes manifest and report the deployed workload"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(DEFAULT_OUTPUT_DIR),
        help="Build output root containing kubernetes/<platform>.yml (default: %(default)s)",
    )
    parser.add_argument(
        "--target",
        dest="targets",
        action="append",
        default=[],
        metavar="PLATFORM[:KIND]",
        help="Candidate deployment target, in preference order (repeatable)",
    )
    parser.add_argument(
        "--image",
        type=str,
        help="Configured container image reference",
    )
    parser.add_argument(
        "--provider",
        dest="providers",
        action="append",
        default=[],
        help="Image builder that produced the image, e.g. jib, docker or s2i (repeatable)",
    )
    return parser.parse_args(list(argv))


def _parse_target(value: str) -> DeploymentTarget:
    platform, _, kind = value.strip().partition(":")
    platform = platform.strip()
    kind = kind.strip()
    if not platform:
        raise ValueError(f"Invalid deployment target: {value!r}")
    if not kind:
        kind = DEPLOYMENT_CONFIG if platform.lower() == OPENSHIFT else DEPLOYMENT
    return DeploymentTarget(platform_name=platform, resource_kind=kind)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        candidates = [_parse_target(value) for value in parsed_args.targets]
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = deploy_from_environment(
            output_dir=parsed_args.output_dir,
            candidates=candidates,
            providers=parsed_args.providers,
            image=parsed_args.image,
        )
    except Exception:
        log.exception("Fatal error during deploy")
        sys.exit(1)

    log.info("Deployed %s with labels %s", result.name, dict(result.labels))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry: load .env, install the SIGINT handler, run."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
