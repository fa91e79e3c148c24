"""Console output helpers for the deploy script."""

import logging
import shlex
from collections.abc import Sequence

logger = logging.getLogger("deployer")


def configure_logging(level: int = logging.INFO) -> None:
  """Plain, message-only console logging for interactive runs."""
  logging.basicConfig(level=level, format="%(message)s")


def log_header(text: str) -> None:
  logger.info("\n*** %s ***", text)


def log_command(command: str) -> None:
  logger.info("> %s", command)


def log_spawn_command(command: str, args: Sequence[str]) -> None:
  log_command(shlex.join([command, *args]))
