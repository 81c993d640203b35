"""
Telegram Bot API data models.

This module defines the subset of the Bot API ``getMe`` payload the
setup wizard reads.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class TelegramUser:
    """Represents the bot account returned by ``getMe``."""

    id: int
    is_bot: bool
    first_name: str
    username: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Username when the bot has one, first name otherwise."""
        return self.username or self.first_name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TelegramUser":
        """Build a user from a Bot API ``User`` object."""
        return cls(
            id=int(data["id"]),
            is_bot=bool(data.get("is_bot", False)),
            first_name=data.get("first_name", ""),
            username=data.get("username"),
        )

    def validate(self) -> bool:
        """Validate user data."""
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise ValueError("id must be an integer")

        if not self.display_name:
            raise ValueError("user must have a username or first name")

        return True


@dataclass
class GetMeResponse:
    """Decoded body of a ``getMe`` call."""

    ok: bool
    result: Optional[TelegramUser] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GetMeResponse":
        """
        Build a response from decoded JSON.

        Raises:
            ValueError: If the payload is not a JSON object or the user
                object is malformed.
        """
        if not isinstance(data, dict):
            raise ValueError(f"unexpected response payload: {data!r}")

        raw_result = data.get("result")
        result = None
        if isinstance(raw_result, dict):
            try:
                result = TelegramUser.from_dict(raw_result)
                result.validate()
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"malformed user in response: {e}") from e

        return cls(
            ok=bool(data.get("ok", False)),
            result=result,
            description=data.get("description"),
        )
