"""
Telegram bot token validation.

Checks a token by calling the Bot API ``getMe`` method. The response body
decides the outcome: Telegram answers a bad token with HTTP 401 and a JSON
body carrying ``ok: false`` and a description.
"""

from typing import Optional

import requests

from ..models.config import DEFAULT_API_BASE_URL
from ..models.telegram import GetMeResponse, TelegramUser
from ..utils.error_handling import ApiUnreachableError, TokenValidationError
from ..utils.logging import get_logger

logger = get_logger("telegram.validator")


class TelegramTokenValidator:
    """Validates bot tokens against the Telegram Bot API."""

    def __init__(
        self,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the validator.

        Args:
            api_base_url: Bot API root, without trailing slash
            timeout: Request timeout in seconds
            session: Optional requests session to reuse
        """
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_me_url(self, token: str) -> str:
        return f"{self.api_base_url}/bot{token}/getMe"

    def fetch_me(self, token: str) -> GetMeResponse:
        """
        Call ``getMe`` and decode the body.

        Raises:
            ApiUnreachableError: On transport failure or an undecodable body.
        """
        try:
            response = self.session.get(self._get_me_url(token), timeout=self.timeout)
            data = response.json()
            return GetMeResponse.from_dict(data)
        except (requests.RequestException, ValueError) as e:
            # The exception text can embed the request URL, which holds the token
            error = ApiUnreachableError(e, secret=token)
            logger.error(
                "Failed to reach Telegram API",
                extra={"error_type": type(e).__name__, "error": error.message},
            )
            raise error from e

    def validate(self, token: str) -> TelegramUser:
        """
        Validate a token.

        Returns:
            The bot account the token belongs to.

        Raises:
            ApiUnreachableError: If the API could not be reached.
            TokenValidationError: If the API rejected the token.
        """
        logger.info("Validating Telegram bot token")

        body = self.fetch_me(token)

        if not body.ok or body.result is None:
            reason = body.description or "Unknown error"
            logger.error("Telegram token validation failed", extra={"reason": reason})
            raise TokenValidationError(reason)

        user = body.result
        logger.info(
            "Token validated",
            extra={"bot_username": user.display_name, "bot_id": user.id},
        )
        return user
