# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "pydantic",
#     "python-dotenv",
#     "structlog",
# ]
# ///
"""
format_plugin: run swiftformat for a Swift package.

Overview
--------
Resolves the swiftformat configuration file, the files to format and the
command line, then runs swiftformat. With `--staged-only` only staged
`.swift` files are formatted and they are added back to the index
afterwards.

Plugin options (everything else is forwarded to swiftformat):
    --config PATH             use this configuration file
    --config-template NAME    fetch a named configuration template
    --swiftversion VERSION    override the package's Swift version
    --target NAME[,NAME]      format these targets only (repeatable)
    --staged-only             format staged files and re-stage them
    --debug                   print every resolved value before running

Host settings come from `FORMAT_PLUGIN_*` environment variables (or a
`.env` file): FORMATTER_PATH, TEMPLATE_FETCHER_PATH, DEFAULT_SWIFT_VERSION,
WORKING_DIRECTORY, CONFIG_FILENAME, FILE_SUFFIX, LOG_FILE.

Usage
-----
    format-plugin
    format-plugin --staged-only
    format-plugin --target Core,App --config-template strict --debug
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from format_plugin.exceptions import FormatPluginError
from format_plugin.logging import setup_logging
from format_plugin.plugin import perform
from format_plugin.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = setup_logging()


def main(argv: Sequence[str] | None = None) -> int:
    arguments = list(sys.argv[1:] if argv is None else argv)
    settings = Settings.from_env()
    if settings.log_file:
        setup_logging(settings.log_file)

    try:
        perform(settings, arguments)
    except FormatPluginError as e:
        logger.error("Format plugin failed", error_type=type(e).__name__, error=str(e))
        raise
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
