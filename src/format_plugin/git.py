from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

from format_plugin.config import STAGED_FILES_COMMAND, SWIFT_SUFFIX
from format_plugin.logging import logger
from format_plugin.process import shell_invocation

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from format_plugin.process import ProcessRunner


def staged_file_paths(
    runner: ProcessRunner,
    *,
    suffix: str = SWIFT_SUFFIX,
    cwd: str | Path | None = None,
) -> list[str]:
    """List staged, non-deleted files ending in ``suffix``.

    Args:
        runner (ProcessRunner): process primitive used to run git
        suffix (str): file suffix to keep, e.g. ``.swift``
        cwd (str | Path | None): directory git is run from

    Raises:
        ProcessFailedError: if git exits non-zero.

    Returns:
        list[str]: matching paths in the order git reports them; may be empty
    """
    result = runner(shell_invocation(STAGED_FILES_COMMAND, cwd=cwd))
    files = [line for line in result.output.split("\n") if line and line.endswith(suffix)]
    logger.info("Collected staged files", suffix=suffix, count=len(files))
    return files


def add_files_to_commit(
    files: Sequence[str],
    runner: ProcessRunner,
    *,
    cwd: str | Path | None = None,
) -> None:
    """Re-stage ``files`` with a single ``git add``.

    Args:
        files (Sequence[str]): paths to add back to the index
        runner (ProcessRunner): process primitive used to run git
        cwd (str | Path | None): directory git is run from

    Raises:
        ProcessFailedError: if git exits non-zero.
    """
    if not files:
        logger.info("No staged files to re-add")
        return
    command = shlex.join(["git", "add", "--", *files])
    runner(shell_invocation(command, cwd=cwd))
    logger.info("Re-staged formatted files", count=len(files))
