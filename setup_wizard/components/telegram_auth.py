"""
Setup step: telegram-auth.

Validates a Telegram bot token with the Bot API ``getMe`` method, writes
TELEGRAM_BOT_TOKEN (and TELEGRAM_ONLY=true unless --no-telegram-only is
given) to the project's .env, and syncs .env to data/env/env for container
access.

Usage:
    python -m setup_wizard --step telegram-auth -- --token <BOT_TOKEN>
"""

from typing import List, Optional

from ..interfaces import IStatusReporter, ITokenValidator
from ..models.config import SetupConfig
from ..models.status import StepArguments, StepResult
from ..services.env_file import EnvFile, mirror_env_file
from ..utils.error_handling import (
    MissingInputError,
    SetupStepError,
    get_error_tracker,
)
from ..utils.logging import get_logger
from .status_reporter import StdoutStatusReporter
from .token_validator import TelegramTokenValidator

logger = get_logger("telegram.auth")

STATUS_KEY = "AUTH_TELEGRAM"
TOKEN_ENV_KEY = "TELEGRAM_BOT_TOKEN"
TELEGRAM_ONLY_ENV_KEY = "TELEGRAM_ONLY"


def parse_args(args: List[str]) -> StepArguments:
    """
    Scan step arguments once.

    ``--token`` consumes the next argument whatever it looks like; a
    trailing or empty ``--token`` leaves the token empty. Unknown
    arguments are ignored.
    """
    parsed = StepArguments()
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--token" and i + 1 < len(args) and args[i + 1]:
            parsed.token = args[i + 1]
            i += 2
            continue
        if arg == "--no-telegram-only":
            parsed.telegram_only = False
        i += 1
    return parsed


class TelegramAuthStep:
    """Validates a bot token and persists it to the project env file."""

    name = "telegram-auth"

    def __init__(
        self,
        config: SetupConfig,
        reporter: Optional[IStatusReporter] = None,
        validator: Optional[ITokenValidator] = None,
    ):
        """
        Initialize the step.

        Args:
            config: Wizard settings (project root, API endpoint, paths)
            reporter: Receives the single status result; stdout by default
            validator: Token validator; a Bot API validator by default
        """
        self.config = config
        self.reporter = reporter or StdoutStatusReporter()
        self.validator = validator or TelegramTokenValidator(
            api_base_url=config.api_base_url,
            timeout=config.request_timeout,
        )

    def run(self, args: List[str]) -> StepResult:
        """
        Run the step.

        Returns:
            The reported StepResult. Its ``exit_code`` is 1 for a missing
            token, a rejected token or an unreachable API.

        Raises:
            OSError: If the env files cannot be read or written.
            ValueError: If the validator returns a user that cannot be reported.
        """
        step_args = parse_args(args)

        try:
            if not step_args.token:
                raise MissingInputError("No --token provided")

            user = self.validator.validate(step_args.token)
        except SetupStepError as e:
            return self._fail(e)

        result = StepResult.success(
            STATUS_KEY,
            BOT_USERNAME=user.display_name,
            BOT_ID=user.id,
            TELEGRAM_ONLY=step_args.telegram_only,
        )
        # Nothing is written for a result that cannot be reported
        result.validate()

        self.persist(step_args)

        return self._report(result)

    def persist(self, step_args: StepArguments):
        """Upsert the Telegram keys into .env and mirror it."""
        env_path = self.config.env_file_path
        env = EnvFile.load(env_path)

        env.set(TOKEN_ENV_KEY, step_args.token)
        if step_args.telegram_only:
            env.set(TELEGRAM_ONLY_ENV_KEY, "true")

        env.save(env_path)
        logger.info(f"Wrote {TOKEN_ENV_KEY} to {self.config.env_file}")

        mirror_env_file(env_path, self.config.env_sync_file_path)

    def _fail(self, error: SetupStepError) -> StepResult:
        get_error_tracker().record_error(
            component=self.name,
            category=error.category,
            severity=error.severity,
            message=error.message,
            exception=error,
        )
        return self._report(StepResult.failed(STATUS_KEY, error.message))

    def _report(self, result: StepResult) -> StepResult:
        result.validate()
        self.reporter.report(result)
        return result
