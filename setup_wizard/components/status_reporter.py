"""
Status reporting for setup steps.

Each step invocation reports exactly one result. The default reporter
writes a delimited block to stdout that the orchestrating process parses:

    === SETUP: AUTH_TELEGRAM ===
    STATUS: success
    BOT_USERNAME: mybot
    === END ===
"""

import sys
from typing import List, Optional, TextIO

from ..models.status import StatusValue, StepResult
from ..utils.logging import get_logger

logger = get_logger("status.reporter")


def format_value(value: StatusValue) -> str:
    """Render a status value, with booleans in lowercase."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_status_block(result: StepResult) -> str:
    """
    Render a step result as a status block.

    Raises:
        ValueError: If the result would produce a malformed block.
    """
    result.validate()
    lines = [f"=== SETUP: {result.step} ==="]
    for key, value in result.to_payload().items():
        lines.append(f"{key}: {format_value(value)}")
    lines.append("=== END ===")
    return "\n".join(lines)


class StdoutStatusReporter:
    """Writes status blocks to a text stream, stdout by default."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def report(self, result: StepResult) -> None:
        stream = self.stream or sys.stdout
        stream.write(format_status_block(result) + "\n")
        stream.flush()
        logger.debug(
            "Status emitted",
            extra={"step": result.step, "status": result.status.value},
        )


class CollectingStatusReporter:
    """Keeps reported results in memory."""

    def __init__(self):
        self.results: List[StepResult] = []

    def report(self, result: StepResult) -> None:
        self.results.append(result)

    @property
    def last(self) -> Optional[StepResult]:
        return self.results[-1] if self.results else None
