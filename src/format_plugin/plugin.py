"""Run swiftformat for a package: resolve config and scope, invoke, re-stage."""

from __future__ import annotations

import shutil
import sys
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from format_plugin.arguments import extract_options
from format_plugin.config import TOOLS_VERSION_PATTERN
from format_plugin.configuration import make_template_fetcher, resolve_configuration_path
from format_plugin.exceptions import (
    ConfigurationFileNotFoundError,
    SwiftVersionNotFoundError,
    ToolNotFoundError,
)
from format_plugin.formatter import build_formatter_arguments, run_formatter
from format_plugin.git import add_files_to_commit, staged_file_paths
from format_plugin.logging import logger
from format_plugin.process import invocation, run_process
from format_plugin.scope import resolve_scope

if TYPE_CHECKING:
    from collections.abc import Sequence

    from format_plugin.config import ExtractedOptions, ProcessResult
    from format_plugin.process import ProcessRunner
    from format_plugin.settings import Settings

RULE = "-" * 60
PACKAGE_MANIFEST = "Package.swift"


def resolve_tool(name: str, explicit: str | Path | None = None) -> str:
    """Locate a host tool, preferring an explicit path over a PATH lookup.

    Args:
        name (str): executable name to look up on PATH
        explicit (str | Path | None): configured path, used as-is when set

    Raises:
        ToolNotFoundError: if no explicit path is given and ``name`` is not on PATH.

    Returns:
        str: path of the executable
    """
    if explicit:
        return str(explicit)
    found = shutil.which(name)
    if found is None:
        raise ToolNotFoundError(name=name)
    return found


def swift_tools_version(directory: Path) -> str | None:
    """Read the ``swift-tools-version`` header of ``Package.swift``.

    Versions are normalised to ``major.minor.patch`` (``5.7`` becomes ``5.7.0``).

    Args:
        directory (Path): package directory holding ``Package.swift``

    Returns:
        str | None: the version, or None when there is no manifest or header
    """
    manifest = directory / PACKAGE_MANIFEST
    if not manifest.is_file():
        return None
    with manifest.open(encoding="utf-8", errors="ignore") as f:
        first_line = f.readline()
    match = TOOLS_VERSION_PATTERN.match(first_line.strip())
    if match is None:
        return None
    parts = match.group("version").split(".")
    parts.extend(["0"] * (3 - len(parts)))
    return ".".join(parts)


def default_swift_version(settings: Settings) -> str | None:
    if settings.default_swift_version:
        return settings.default_swift_version
    return swift_tools_version(settings.working_directory)


def write_debug_info(
    out: TextIO,
    *,
    executable: str,
    swift_version: str,
    configuration_path: str,
    options: ExtractedOptions,
    scope: Sequence[str],
    arguments: Sequence[str],
) -> None:
    """Print every resolved value, before anything is checked or run."""
    lines = [
        RULE,
        "DEBUG INFO",
        RULE,
        f"=> Executable Path:       {executable}",
        f"=> Swift Version:         {swift_version}",
        f"=> Configuration File:    {configuration_path}",
        f"=> Debugging?:            {options.debug}",
        f"=> Staged Files Only?:    {options.staged_only}",
        f"=> Targets:               {options.targets}",
    ]
    if len(scope) > 1:
        lines.append("=> Formatted File Paths:")
        lines.extend(f"     - {path}" for path in scope)
    elif scope:
        lines.append(f"=> Formatted File Paths:  {scope[0]}")
    else:
        lines.append("=> Formatted File Paths:  ?")
    lines.extend([f"=> Arguments:             {list(arguments)}", RULE])
    print("\n".join(lines), file=out)


def perform(
    settings: Settings,
    arguments: Sequence[str],
    *,
    runner: ProcessRunner = run_process,
    out: TextIO | None = None,
) -> ProcessResult:
    """Format the package described by ``settings``.

    Steps, in order: extract options, resolve the configuration file,
    resolve the scope, print debug info when asked, check the configuration
    exists, run swiftformat, and re-stage files in staged-only mode.

    Args:
        settings (Settings): host context (tools, working directory, defaults)
        arguments (Sequence[str]): raw user arguments
        runner (ProcessRunner): process primitive shared by every external call
        out (TextIO | None): stream for debug output; stdout when None

    Raises:
        ConfigurationFileNotFoundError: if the resolved configuration does not exist.
        ProcessFailedError: if the fetcher, git or swiftformat fails.
        SwiftVersionNotFoundError: if no Swift version can be determined.
        ToolNotFoundError: if swiftformat or the template fetcher cannot be found.

    Returns:
        ProcessResult: the swiftformat result
    """
    out = out or sys.stdout
    working_directory = Path(settings.working_directory)
    options = extract_options(arguments)

    swift_version = options.swift_version or default_swift_version(settings)
    if not swift_version:
        raise SwiftVersionNotFoundError(folder=working_directory)

    executable = resolve_tool(settings.command_name, settings.formatter_path)

    # The fetcher is only located when a template is actually needed.
    def fetch_template(name: str | None) -> str:
        fetcher = make_template_fetcher(
            resolve_tool(settings.template_fetcher_name, settings.template_fetcher_path),
            runner,
            command_name=settings.command_name,
            cwd=working_directory,
        )
        return fetcher(name)

    configuration_path = resolve_configuration_path(
        options,
        working_directory,
        fetch_template,
        config_filename=settings.config_filename,
    )
    scope = resolve_scope(
        options.targets,
        staged_only=options.staged_only,
        staged_files=partial(
            staged_file_paths,
            runner,
            suffix=settings.file_suffix,
            cwd=working_directory,
        ),
    )

    if options.debug:
        write_debug_info(
            out,
            executable=executable,
            swift_version=swift_version,
            configuration_path=configuration_path,
            options=options,
            scope=scope,
            arguments=arguments,
        )

    config_file = Path(configuration_path)
    if not config_file.is_absolute():
        config_file = working_directory / config_file
    if not config_file.is_file():
        raise ConfigurationFileNotFoundError(path=configuration_path)

    formatter_arguments = build_formatter_arguments(
        scope,
        swift_version=swift_version,
        configuration_path=configuration_path,
        passthrough=options.passthrough,
    )
    if options.debug:
        command = invocation(executable, formatter_arguments).command_line
        print(f"=> SwiftFormat Command:\n$ {command}\n{RULE}", file=out)

    result = run_formatter(executable, formatter_arguments, runner, cwd=working_directory)

    if options.staged_only:
        add_files_to_commit(scope, runner, cwd=working_directory)

    logger.info("Formatting finished", files=len(scope), staged_only=options.staged_only)
    return result
