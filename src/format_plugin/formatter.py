from __future__ import annotations

from typing import TYPE_CHECKING

from format_plugin.config import CACHE_ARGUMENTS, EXCLUDED_FILES
from format_plugin.logging import logger
from format_plugin.process import invocation

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from format_plugin.config import ProcessResult
    from format_plugin.process import ProcessRunner


def build_formatter_arguments(
    scope: Sequence[str],
    *,
    swift_version: str,
    configuration_path: str,
    passthrough: Sequence[str] = (),
) -> list[str]:
    """Assemble the swiftformat argument vector.

    The order is fixed: scope, version, configuration, cache, exclusions,
    then the user's passthrough arguments.

    Args:
        scope (Sequence[str]): files, directories or targets to format
        swift_version (str): value for ``--swiftversion``
        configuration_path (str): value for ``--config``
        passthrough (Sequence[str]): unconsumed user arguments

    Returns:
        list[str]: the flattened argument vector
    """
    return [
        *scope,
        "--swiftversion",
        swift_version,
        "--config",
        configuration_path,
        *CACHE_ARGUMENTS,
        "--exclude",
        ",".join(EXCLUDED_FILES),
        *passthrough,
    ]


def run_formatter(
    executable: str | Path,
    arguments: Sequence[str],
    runner: ProcessRunner,
    *,
    cwd: str | Path | None = None,
) -> ProcessResult:
    """Run swiftformat; raises ``ProcessFailedError`` on a non-zero exit."""
    logger.info("Running formatter", executable=str(executable), argument_count=len(arguments))
    return runner(invocation(executable, arguments, cwd=cwd))
