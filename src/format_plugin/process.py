from __future__ import annotations

import os
import subprocess  # noqa: S404
from typing import TYPE_CHECKING, Protocol

from format_plugin.config import SHELL_EXECUTABLE, ProcessInvocation, ProcessResult
from format_plugin.exceptions import ProcessFailedError
from format_plugin.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

# Variables carried into the otherwise empty child environment.
_INHERITED_ENV = ("PATH", "HOME")
# Git hands hooks GIT_INDEX_FILE, GIT_DIR, ...; git commands must see the same repository and index.
GIT_ENV_PREFIXES = ("GIT_",)


class ProcessRunner(Protocol):
    """Anything that can execute a ``ProcessInvocation``.

    Implementations must raise ``ProcessFailedError`` on a non-zero exit.
    """

    def __call__(self, invocation: ProcessInvocation) -> ProcessResult: ...


def clean_environment(prefixes: Sequence[str] = ()) -> dict[str, str]:
    """Build the minimal environment external tools are launched with.

    Args:
        prefixes (Sequence[str]): extra variables to keep, matched by name prefix.

    Returns:
        dict[str, str]: ``PATH``, ``HOME`` and variables matching ``prefixes``, when set.
    """
    env = {key: os.environ[key] for key in _INHERITED_ENV if key in os.environ}
    if prefixes:
        env.update({key: value for key, value in os.environ.items() if key.startswith(tuple(prefixes))})
    env.setdefault("PATH", os.defpath)
    return env


def invocation(
    executable: str | Path,
    arguments: Sequence[str] = (),
    *,
    cwd: str | Path | None = None,
) -> ProcessInvocation:
    """Describe a call to ``executable`` with ``arguments``."""
    return ProcessInvocation(
        executable=str(executable),
        arguments=tuple(arguments),
        cwd=str(cwd) if cwd is not None else None,
    )


def shell_invocation(command: str, *, cwd: str | Path | None = None) -> ProcessInvocation:
    """Describe ``command`` run through bash, keeping the caller's ``GIT_*`` variables."""
    # Non-interactive on purpose: `-i` without a TTY prints job-control noise and sources rc files.
    return ProcessInvocation(
        executable=SHELL_EXECUTABLE,
        arguments=("-c", command),
        cwd=str(cwd) if cwd is not None else None,
        inherited_env_prefixes=GIT_ENV_PREFIXES,
    )


def run_process(call: ProcessInvocation) -> ProcessResult:
    """Run ``call`` to completion and capture its combined output.

    Standard error is merged into standard output. The process is always
    waited for, so its output is fully drained before this returns or raises.

    Args:
        call (ProcessInvocation): the executable, arguments and working directory.

    Raises:
        ProcessFailedError: if the process cannot be started or exits non-zero.

    Returns:
        ProcessResult: the captured output and a zero exit status.
    """
    logger.debug("Running process", command=call.command_line, cwd=call.cwd)
    try:
        completed = subprocess.run(  # noqa: S603
            [call.executable, *call.arguments],
            cwd=call.cwd,
            env=clean_environment(call.inherited_env_prefixes),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        logger.warning("Process could not be started", command=call.command_line, error=str(e))
        raise ProcessFailedError(command=call.command_line, returncode=-1, output=str(e)) from e

    result = ProcessResult(output=completed.stdout or "", returncode=completed.returncode)
    if result.returncode != 0:
        logger.warning(
            "Process exited with non-zero status",
            command=call.command_line,
            returncode=result.returncode,
        )
        raise ProcessFailedError(
            command=call.command_line,
            returncode=result.returncode,
            output=result.output,
        )
    return result
