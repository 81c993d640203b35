"""
Main entry point for the setup wizard.

Usage:
    python -m setup_wizard --step telegram-auth -- --token <BOT_TOKEN>
"""

import argparse
import sys
from typing import Callable, Dict, List, Optional, Tuple

from .interfaces import ISetupStep, IStatusReporter
from .components.telegram_auth import TelegramAuthStep
from .models.config import SetupConfig
from .services.config_manager import ConfigurationManager
from .utils.logging import get_logger, setup_logging

StepFactory = Callable[[SetupConfig, Optional[IStatusReporter]], ISetupStep]

STEPS: Dict[str, StepFactory] = {
    TelegramAuthStep.name: lambda config, reporter: TelegramAuthStep(config, reporter=reporter),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="setup-wizard",
        allow_abbrev=False,
        description="Run a setup wizard step. Step arguments follow '--'.",
    )
    parser.add_argument("--step", required=True, choices=sorted(STEPS), help="Step to run")
    parser.add_argument("--project-root", default=None, help="Project directory (default: cwd)")
    parser.add_argument("--config", default=None, help="Settings file (default: setup.yaml in project root)")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override configured log level",
    )
    return parser


def split_argv(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Split wizard options from step arguments at the first '--'."""
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1:]
    return argv, []


def run(argv: List[str], reporter: Optional[IStatusReporter] = None) -> int:
    """
    Run a step and return the process exit code.

    Args:
        argv: Command line arguments, without the program name
        reporter: Status reporter handed to the step; stdout by default
    """
    wizard_argv, step_argv = split_argv(argv)
    parser = build_parser()
    options, extra = parser.parse_known_args(wizard_argv)
    step_argv = extra + step_argv

    # Console logging first so configuration errors are logged too
    manager = setup_logging(log_level=options.log_level or SetupConfig.log_level)
    logger = get_logger("main")

    try:
        config = ConfigurationManager(options.config, options.project_root).load_config()
    except (ValueError, FileNotFoundError) as e:
        logger.error("Configuration error", extra={"error": str(e)})
        return 1

    log_level = options.log_level or config.log_level
    if config.log_dir_path is not None:
        manager = setup_logging(log_dir=str(config.log_dir_path), log_level=log_level)
        logger = get_logger("main")
    else:
        manager.set_log_level(log_level)

    logger.info(
        "Running setup step",
        extra={"step": options.step, "project_root": str(config.project_root)},
    )

    step = STEPS[options.step](config, reporter)
    try:
        result = step.run(step_argv)
    except OSError as e:
        logger.error("Setup step failed", extra={"step": options.step, "error": str(e)}, exc_info=True)
        return 1

    logger.info(
        "Setup step finished",
        extra={"step": options.step, "status": result.status.value},
    )
    return result.exit_code


def main():
    """Console script entry point."""
    try:
        sys.exit(run(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nSetup interrupted by user", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
