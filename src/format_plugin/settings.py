from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from format_plugin.config import (
    COMMAND_NAME,
    DEFAULT_CONFIG_FILENAME,
    SWIFT_SUFFIX,
    TEMPLATE_FETCHER_NAME,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_FILE = find_dotenv(usecwd=True)
ENV_PREFIX = "FORMAT_PLUGIN_"


class Settings(BaseModel):
    """Host context for a plugin run: where things are and which tools to call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    working_directory: Path = Field(default_factory=Path.cwd, description="Package directory.")
    formatter_path: Path | None = Field(
        default=None,
        description="swiftformat executable; looked up on PATH when unset.",
    )
    template_fetcher_path: Path | None = Field(
        default=None,
        description="Configuration template fetcher; looked up on PATH when unset.",
    )
    default_swift_version: str = Field(
        default="",
        description="Version used when --swiftversion is absent; read from Package.swift when empty.",
    )
    command_name: str = Field(default=COMMAND_NAME, description="Formatter tool name.")
    template_fetcher_name: str = Field(
        default=TEMPLATE_FETCHER_NAME,
        description="Template fetcher tool name.",
    )
    config_filename: str = Field(
        default=DEFAULT_CONFIG_FILENAME,
        description="Configuration dotfile looked up in the working directory.",
    )
    file_suffix: str = Field(default=SWIFT_SUFFIX, description="Suffix of files to format.")
    log_file: str = Field(default="", description="Log file path.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``FORMAT_PLUGIN_*`` environment variables.

        When ``environ`` is None, the nearest ``.env`` file is loaded first
        (existing variables win) and ``os.environ`` is read.

        Args:
            environ (Mapping[str, str] | None): explicit environment to read instead of ``os.environ``.

        Returns:
            Settings: settings with every variable found applied over the defaults.
        """
        if environ is None:
            if ENV_FILE:
                load_dotenv(ENV_FILE, override=False)
            environ = os.environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if environ.get(f"{ENV_PREFIX}{name.upper()}")
        }
        return cls(**values)
