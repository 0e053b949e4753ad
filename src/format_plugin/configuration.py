"""Resolve which swiftformat configuration file a run uses."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from format_plugin.config import COMMAND_NAME, DEFAULT_CONFIG_FILENAME, TEMPLATE_KEY_PATTERN
from format_plugin.logging import logger
from format_plugin.process import invocation

if TYPE_CHECKING:
    from collections.abc import Callable

    from format_plugin.config import ExtractedOptions
    from format_plugin.process import ProcessRunner

    TemplateFetcher = Callable[[str | None], str]
    ConfigLookup = Callable[[], str | None]


def parse_template_output(output: str) -> str:
    """Turn the template fetcher's output into a path.

    The fetcher may print ``SOME_KEY=/path/to/file``; the key prefix is
    dropped and surrounding whitespace trimmed.

    Args:
        output (str): raw standard output of the fetcher

    Returns:
        str: the configuration file path
    """
    return TEMPLATE_KEY_PATTERN.sub("", output.lstrip(), count=1).strip()


def make_template_fetcher(
    fetcher_path: str | Path,
    runner: ProcessRunner,
    *,
    command_name: str = COMMAND_NAME,
    cwd: str | Path | None = None,
) -> TemplateFetcher:
    """Bind the fetcher executable to a runner.

    The returned callable runs ``<fetcher> <command_name> [name]`` and
    returns the parsed path. Without a name the fetcher picks its default
    template.

    Args:
        fetcher_path (str | Path): template fetcher executable
        runner (ProcessRunner): process primitive used to run it
        command_name (str): tool to fetch a configuration file for
        cwd (str | Path | None): working directory for the fetcher

    Returns:
        TemplateFetcher: callable taking an optional template name
    """

    def fetch(name: str | None) -> str:
        arguments = [command_name] if name is None else [command_name, name]
        result = runner(invocation(fetcher_path, arguments, cwd=cwd))
        path = parse_template_output(result.output)
        logger.info("Fetched configuration template", template=name, path=path)
        return path

    return fetch


def resolve_configuration_path(
    options: ExtractedOptions,
    working_directory: str | Path,
    fetch_template: TemplateFetcher,
    *,
    config_filename: str = DEFAULT_CONFIG_FILENAME,
) -> str:
    """Pick the configuration file for this run.

    Sources are tried in order and the first one that yields a path wins:

    1. ``--config <path>``, used verbatim.
    2. ``--config-template <name>``, resolved by the template fetcher.
    3. ``<working_directory>/<config_filename>``, when it exists.
    4. The fetcher's default template.

    The returned path is not checked for existence here.

    Args:
        options (ExtractedOptions): options extracted from the command line
        working_directory (str | Path): directory searched for the dotfile
        fetch_template (TemplateFetcher): fetcher taking an optional template name
        config_filename (str): name of the configuration dotfile

    Returns:
        str: the configuration file path
    """
    local_config = Path(working_directory) / config_filename

    lookups: list[tuple[str, ConfigLookup]] = [
        ("option", lambda: options.config),
        (
            "template",
            lambda: fetch_template(options.config_template) if options.config_template else None,
        ),
        ("working-directory", lambda: str(local_config) if local_config.exists() else None),
    ]
    for source, lookup in lookups:
        path = lookup()
        if path is not None:
            logger.info("Resolved configuration file", source=source, path=path)
            return path

    path = fetch_template(None)
    logger.info("Resolved configuration file", source="default-template", path=path)
    return path
