"""Reporting and process termination for generation runs.

Code generation never exits the process itself; the orchestrator hands every
failure to a Reporter, which decides how the failure is shown and how the run
ends.
"""

import logging
import sys
from typing import NoReturn, Protocol

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    def info(self, message: str) -> None: ...

    def fail(self, error: BaseException) -> NoReturn: ...


class LoggingReporter:
    """Logs through ``logging`` and exits with status 1 on failure."""

    def info(self, message: str) -> None:
        logger.info(message)

    def fail(self, error: BaseException) -> NoReturn:
        logger.error(f'Error: {error}')
        sys.exit(1)
