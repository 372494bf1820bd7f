"""Command line entry point: ``python -m eds_analytics``."""

import asyncio
import sys

from eds_analytics.config.state import get_config
from eds_analytics.infrastructure.observability import (
    get_orchestration_logger,
    setup_logging,
)
from eds_analytics.runner import run_analytics


def main() -> int:
    config = get_config()
    setup_logging(level=config.logging.level, json_logs=config.logging.json_logs)
    log = get_orchestration_logger("cli")

    result = asyncio.run(run_analytics(config))

    log.info("run_summary", **result.to_dict())
    log.info("Demo Application Ran Successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
