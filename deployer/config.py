"""Deploy-time configuration, read once from the environment at startup."""

import logging
import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .errors import DeployError

logger = logging.getLogger(__name__)

CLOUDFLARE_EMAIL = "CLOUDFLARE_EMAIL"
CLOUDFLARE_API_KEY = "CLOUDFLARE_API_KEY"
CLOUDFLARE_ZONE_ID = "CLOUDFLARE_ZONE_ID"
CLOUDFLARE_ENV_VARS = (CLOUDFLARE_EMAIL, CLOUDFLARE_API_KEY, CLOUDFLARE_ZONE_ID)

DEFAULT_OUTPUTS_FILE = "cdk-output-data"
DEFAULT_CDK_COMMAND = "cdk"


@dataclass(frozen=True)
class CloudflareCredentials:
  """API credentials for purging a single Cloudflare zone."""

  email: str
  api_key: str
  zone_id: str

  def __repr__(self) -> str:
    return f"CloudflareCredentials(email={self.email!r}, api_key='***', zone_id={self.zone_id!r})"


@dataclass(frozen=True)
class DeployConfig:
  """Settings for a single deploy run.

  ``cloudflare`` is None when any of the Cloudflare variables is unset; the
  names of the unset ones are kept in ``missing_cloudflare_vars``.
  ``cdk_command`` holds the executable followed by any leading arguments,
  e.g. ``("npx", "cdk")``.
  """

  outputs_file: Path
  cdk_command: tuple[str, ...] = (DEFAULT_CDK_COMMAND,)
  cloudflare: CloudflareCredentials | None = None
  missing_cloudflare_vars: tuple[str, ...] = ()

  @classmethod
  def from_env(
    cls,
    environ: Mapping[str, str] | None = None,
    cwd: Path | str | None = None,
  ) -> "DeployConfig":
    """Build the config from environment variables.

    Args:
      environ: Variables to read (default: the process environment)
      cwd: Directory the outputs file is relative to (default: current directory)

    Returns:
      The deploy configuration
    """
    if environ is None:
      environ = os.environ
    base_dir = Path(cwd) if cwd is not None else Path.cwd()

    outputs_file = Path(environ.get("CDK_OUTPUTS_FILE") or DEFAULT_OUTPUTS_FILE)
    if not outputs_file.is_absolute():
      outputs_file = base_dir / outputs_file

    missing = tuple(name for name in CLOUDFLARE_ENV_VARS if not environ.get(name))
    cloudflare = None
    if not missing:
      cloudflare = CloudflareCredentials(
        email=environ[CLOUDFLARE_EMAIL],
        api_key=environ[CLOUDFLARE_API_KEY],
        zone_id=environ[CLOUDFLARE_ZONE_ID],
      )

    return cls(
      outputs_file=outputs_file,
      cdk_command=parse_command(environ.get("CDK_COMMAND", "")) or (DEFAULT_CDK_COMMAND,),
      cloudflare=cloudflare,
      missing_cloudflare_vars=missing,
    )


def parse_command(value: str) -> tuple[str, ...]:
  """Split a shell-style command line into its words."""
  try:
    return tuple(shlex.split(value))
  except ValueError as e:
    raise DeployError(f"Invalid command {value!r}: {e}") from e


def load_environment(env_file: Path | str | None = None) -> bool:
  """Load a ``.env`` file into the process environment.

  Variables already set in the environment win over the file. Without an
  explicit path the file is searched for from the working directory upwards.
  """
  path = str(env_file) if env_file is not None else find_dotenv(usecwd=True)
  if not path:
    logger.debug("No .env file found")
    return False
  return load_dotenv(path)
