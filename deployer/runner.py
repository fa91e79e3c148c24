"""Run external commands while streaming and capturing their output."""

import os
import shutil
import subprocess
import sys
import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import IO, cast

from .errors import CommandError


@dataclass(frozen=True)
class CommandResult:
  """Buffered output of a command that exited with status 0."""

  stdout: str
  stderr: str


Runner = Callable[[str, Sequence[str]], CommandResult]


def _pump(source: IO[str], sink: IO[str], buffer: list[str]) -> None:
  """Copy a child stream line by line to ``sink``, keeping a copy."""
  with source:
    for line in iter(source.readline, ""):
      sink.write(line)
      sink.flush()
      buffer.append(line)


def run_command(
  command: str,
  args: Sequence[str] = (),
  *,
  env: Mapping[str, str] | None = None,
  cwd: str | None = None,
) -> CommandResult:
  """Run a command attached to the terminal and wait for it to exit.

  Standard input is inherited so prompts stay interactive. Standard output and
  error are echoed to this process's streams as they arrive and also buffered.
  There is no timeout.

  Args:
    command: Executable name or path, looked up on PATH
    args: Arguments passed to the command
    env: Extra environment variables for the child
    cwd: Working directory for the child

  Returns:
    The buffered stdout and stderr

  Raises:
    CommandError: If the command cannot be launched or exits non-zero
  """
  child_env = {**os.environ, **(env or {}), "FORCE_COLOR": "1"}
  executable = shutil.which(command) or command

  try:
    process = subprocess.Popen(
      [executable, *args],
      stdout=subprocess.PIPE,
      stderr=subprocess.PIPE,
      text=True,
      errors="replace",
      env=child_env,
      cwd=cwd,
    )
  except OSError as e:
    raise CommandError(command, args, None, stderr=str(e)) from e

  stdout: list[str] = []
  stderr: list[str] = []
  # Both pipes exist since stdout and stderr were opened with PIPE
  child_stdout = cast(IO[str], process.stdout)
  child_stderr = cast(IO[str], process.stderr)
  pumps = [
    threading.Thread(target=_pump, args=(child_stdout, sys.stdout, stdout), daemon=True),
    threading.Thread(target=_pump, args=(child_stderr, sys.stderr, stderr), daemon=True),
  ]
  for pump in pumps:
    pump.start()

  returncode = process.wait()
  for pump in pumps:
    pump.join()

  result = CommandResult(stdout="".join(stdout), stderr="".join(stderr))
  if returncode != 0:
    raise CommandError(command, args, returncode, result.stdout, result.stderr)
  return result
