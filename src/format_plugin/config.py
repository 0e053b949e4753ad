from __future__ import annotations

import re
import shlex

from pydantic import BaseModel, ConfigDict, Field, computed_field

COMMAND_NAME = "swiftformat"
TEMPLATE_FETCHER_NAME = "kipple-file-provider"
DEFAULT_CONFIG_FILENAME = ".swiftformat"
SWIFT_SUFFIX = ".swift"
CURRENT_DIRECTORY = "."
SHELL_EXECUTABLE = "/bin/bash"

# Passed on the command line because exclusion rules inside a file given via
# `--config` are not respected by swiftformat.
EXCLUDED_FILES: tuple[str, ...] = (
    # Swift Package Manager
    ".build",
    ".swiftpm",
    "**/Package.swift",
    # CoreData
    "**/*+CoreDataProperties.swift",
    # Vapor public directory
    "Public",
    # Example files, e.g. blog snippets
    "**/*.example.swift",
    # Generated code (Sourcery, SwiftGen, Apollo, ...)
    "**/*.autogenerated.swift",
)

# swiftformat caches outside the package directory, which the plugin cannot write to.
CACHE_ARGUMENTS: tuple[str, ...] = ("--cache", "ignore")

STAGED_FILES_COMMAND = "git diff --diff-filter=d --staged --name-only"

TEMPLATE_KEY_PATTERN = re.compile(r"^[A-Z_]*=")
TOOLS_VERSION_PATTERN = re.compile(
    r"^//\s*swift-tools-version\s*:\s*(?P<version>\d+(?:\.\d+){0,2})",
)


class ExtractedOptions(BaseModel):
    """Options recognised on the plugin command line for a single run.

    Attributes:
        config: Explicit configuration file path (`--config`).
        config_template: Template name for the fetcher (`--config-template`).
        swift_version: Value of `--swiftversion`, if given.
        debug: Whether `--debug` was passed.
        staged_only: Whether `--staged-only` was passed.
        targets: Values of `--target`, comma lists flattened when given once.
        passthrough: Every token not consumed above, in original order.
    """

    model_config = ConfigDict(frozen=True)

    config: str | None = Field(default=None, description="Explicit configuration file path")
    config_template: str | None = Field(default=None, description="Configuration template name")
    swift_version: str | None = Field(default=None, description="Requested Swift version")
    debug: bool = Field(default=False, description="Print resolved values before running")
    staged_only: bool = Field(default=False, description="Format staged files only")
    targets: list[str] = Field(default_factory=list, description="Explicit targets")
    passthrough: list[str] = Field(default_factory=list, description="Arguments for swiftformat")


class ProcessInvocation(BaseModel):
    """A single external call: an executable and its ordered arguments."""

    model_config = ConfigDict(frozen=True)

    executable: str = Field(..., description="Path or name of the executable")
    arguments: tuple[str, ...] = Field(default=(), description="Ordered argument vector")
    cwd: str | None = Field(default=None, description="Working directory for the process")
    inherited_env_prefixes: tuple[str, ...] = Field(
        default=(),
        description="Prefixes of extra environment variables passed through to the process",
    )

    @computed_field
    @property
    def command_line(self) -> str:
        """Shell-quoted rendering of the full command, for logs and errors."""
        return shlex.join([self.executable, *self.arguments])


class ProcessResult(BaseModel):
    """Outcome of a finished process: combined stdout/stderr and exit code."""

    model_config = ConfigDict(frozen=True)

    output: str = Field(default="", description="Combined standard output and error")
    returncode: int = Field(default=0, description="Process exit status")
