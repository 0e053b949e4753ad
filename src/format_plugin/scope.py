from __future__ import annotations

from typing import TYPE_CHECKING

from format_plugin.config import CURRENT_DIRECTORY

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


def resolve_scope(
    targets: Sequence[str],
    *,
    staged_only: bool,
    staged_files: Callable[[], list[str]],
) -> list[str]:
    """Decide what swiftformat should format.

    Explicit targets win. Otherwise staged-only mode asks for the staged
    files, and an empty answer stays empty. Without either, the whole
    current directory is formatted.

    Args:
        targets (Sequence[str]): targets named with ``--target``
        staged_only (bool): whether ``--staged-only`` was passed
        staged_files (Callable[[], list[str]]): staged file query, only called in staged-only mode

    Returns:
        list[str]: the scope passed to swiftformat
    """
    if targets:
        return list(targets)
    if staged_only:
        return staged_files()
    return [CURRENT_DIRECTORY]
