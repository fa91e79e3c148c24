"""Exceptions raised while deploying a website."""

from collections.abc import Sequence


class DeployError(Exception):
  """Base class for deploy failures."""


class CommandError(DeployError):
  """An external command could not be launched or exited with a non-zero status."""

  def __init__(
    self,
    command: str,
    args: Sequence[str],
    returncode: int | None,
    stdout: str = "",
    stderr: str = "",
  ) -> None:
    self.command = command
    self.args_list = list(args)
    self.returncode = returncode
    self.stdout = stdout
    self.stderr = stderr

    full_command = " ".join([command, *self.args_list])
    if returncode is None:
      message = f"failed to launch `{full_command}`"
    else:
      message = f"`{full_command}` exited with code {returncode}"
    super().__init__(message)


class ManifestError(DeployError):
  """The CDK outputs file is missing, unreadable or malformed."""
