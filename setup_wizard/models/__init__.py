"""
Data models for the setup wizard.

This module contains the data classes used for Bot API payloads,
step arguments and results, and wizard configuration.
"""

from .config import SetupConfig
from .status import StepArguments, StepResult, StepStatus
from .telegram import GetMeResponse, TelegramUser

__all__ = [
    "SetupConfig",
    "StepArguments",
    "StepResult",
    "StepStatus",
    "GetMeResponse",
    "TelegramUser",
]
