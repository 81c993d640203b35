"""
Protocol interfaces for the setup wizard.

These protocols mark the seams where steps take their collaborators, so
hosts and tests can inject their own implementations.
"""

from typing import TYPE_CHECKING, List, Protocol

from .models.status import StepResult

if TYPE_CHECKING:
    from .models.telegram import TelegramUser


class IStatusReporter(Protocol):
    """Protocol for delivering a step outcome to the orchestrator."""

    def report(self, result: StepResult) -> None:
        """Emit a single step result."""
        ...


class ITokenValidator(Protocol):
    """Protocol for checking a bot token against the remote service."""

    def validate(self, token: str) -> "TelegramUser":
        """Return the bot account or raise a SetupStepError."""
        ...


class ISetupStep(Protocol):
    """Protocol for a runnable setup step."""

    name: str

    def run(self, args: List[str]) -> StepResult:
        """Run the step with its raw argument list."""
        ...
