from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FormatPluginError(Exception):
    """Base exception for errors in the format_plugin module."""


@dataclass(frozen=True)
class ConfigurationFileNotFoundError(FormatPluginError):
    """Raised when the resolved configuration file does not exist."""

    path: str
    message: str = "Configuration file not found."

    def __str__(self) -> str:
        return f"{self.message} Resolved path: {self.path}"


@dataclass(frozen=True)
class ProcessFailedError(FormatPluginError):
    """Raised when an external process exits non-zero or cannot be started."""

    command: str
    returncode: int
    output: str

    def __str__(self) -> str:
        text = f"Process failed with exit code {self.returncode}: {self.command}"
        if self.output.strip():
            text = f"{text}\n{self.output.rstrip()}"
        return text


@dataclass(frozen=True)
class ToolNotFoundError(FormatPluginError):
    """Raised when a required host tool cannot be located."""

    name: str
    message: str = "Required tool could not be found on PATH."

    def __str__(self) -> str:
        return f"{self.message} Tool: {self.name}"


@dataclass(frozen=True)
class SwiftVersionNotFoundError(FormatPluginError):
    """Raised when no Swift version is passed, configured, or declared by the package."""

    folder: Path
    message: str = "No --swiftversion given and no swift-tools-version found."

    def __str__(self) -> str:
        return f"{self.message} Searched: {self.folder}"
