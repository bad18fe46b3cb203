#!/usr/bin/env python3
"""Publish the Move DEX package, create its first pool and update the frontend config.

Settings are read from the environment and ``.env`` (see ``pool_bootstrap.env_utils``).
Everything the run does, including raw CLI output, is written to the run log.
"""

from __future__ import annotations

import datetime
import sys

from pool_bootstrap import (
    BootstrapError,
    BootstrapOrchestrator,
    ProcessRunner,
    SuiGateway,
    load_settings,
)
from pool_bootstrap.logging_utils import get_logger, start_run_log


def main() -> int:
    try:
        settings = load_settings()
    except BootstrapError as exc:
        get_logger().error(f"FATAL ERROR: {exc}")
        return 1

    logger = start_run_log(settings.log_file)
    logger.info(f"Run started at {datetime.datetime.now(datetime.timezone.utc).isoformat()}")
    logger.info(f"Package path: {settings.package_path}")
    logger.info(f"Config path: {settings.config_path}")
    logger.info("=" * 80)

    runner = ProcessRunner(cwd=settings.package_path.parent, logger=logger)
    gateway = SuiGateway(runner, sui_bin=settings.sui_bin, logger=logger)
    orchestrator = BootstrapOrchestrator(gateway, settings, logger=logger)
    try:
        state = orchestrator.run()
    except Exception as exc:  # pylint: disable=broad-except
        logger.error(f"FATAL ERROR: {exc}", exc_info=True)
        return 1

    for name, value in state.to_state().items():
        logger.info(f"{name}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
