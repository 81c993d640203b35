"""
Setup step status and argument models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Union

StatusValue = Union[str, int, bool]


class StepStatus(Enum):
    """Outcome of a setup step."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class StepArguments:
    """Arguments accepted by the telegram-auth step."""

    token: str = ""
    telegram_only: bool = True


@dataclass
class StepResult:
    """Outcome of one step invocation, reported once to the orchestrator."""

    step: str
    status: StepStatus
    fields: Dict[str, StatusValue] = field(default_factory=dict)

    @classmethod
    def success(cls, step: str, **fields: StatusValue) -> "StepResult":
        return cls(step=step, status=StepStatus.SUCCESS, fields=dict(fields))

    @classmethod
    def failed(cls, step: str, error: str) -> "StepResult":
        return cls(step=step, status=StepStatus.FAILED, fields={"ERROR": error})

    @property
    def succeeded(self) -> bool:
        return self.status is StepStatus.SUCCESS

    @property
    def error(self) -> str:
        return str(self.fields.get("ERROR", ""))

    @property
    def exit_code(self) -> int:
        """Process exit code a host should use for this result."""
        return 0 if self.succeeded else 1

    def to_payload(self) -> Dict[str, StatusValue]:
        """Flat mapping emitted on the status channel, STATUS first."""
        payload: Dict[str, StatusValue] = {"STATUS": self.status.value}
        payload.update(self.fields)
        return payload

    def validate(self) -> bool:
        """Validate result data."""
        if not self.step:
            raise ValueError("step cannot be empty")

        if not self.succeeded and not self.error:
            raise ValueError("ERROR should be provided when status is failed")

        for key, value in self.fields.items():
            if not isinstance(value, (str, int, bool)):
                raise ValueError(f"status field {key} must be a scalar")

        return True
