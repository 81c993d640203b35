"""
Setup steps and their collaborators.

This module contains the telegram-auth step, the Bot API token validator
and the status reporters steps emit their outcome through.
"""

from .status_reporter import CollectingStatusReporter, StdoutStatusReporter
from .telegram_auth import TelegramAuthStep, parse_args
from .token_validator import TelegramTokenValidator

__all__ = [
    "TelegramAuthStep",
    "TelegramTokenValidator",
    "StdoutStatusReporter",
    "CollectingStatusReporter",
    "parse_args",
]
