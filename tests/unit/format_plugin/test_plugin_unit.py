from __future__ import annotations

import io
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from format_plugin import plugin
from format_plugin.config import ExtractedOptions
from format_plugin.exceptions import ToolNotFoundError
from format_plugin.settings import Settings

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.mark.unit
@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("// swift-tools-version:5.7", "5.7.0"),
        ("// swift-tools-version: 5.9.2", "5.9.2"),
        ("//swift-tools-version:6", "6.0.0"),
        ("import PackageDescription", None),
    ],
)
def test_swift_tools_version_reads_manifest_header(
    tmp_path: Path,
    header: str,
    expected: str | None,
) -> None:
    (tmp_path / "Package.swift").write_text(f"{header}\nimport PackageDescription\n", encoding="utf-8")

    assert plugin.swift_tools_version(tmp_path) == expected


@pytest.mark.unit
def test_swift_tools_version_without_manifest(tmp_path: Path) -> None:
    assert plugin.swift_tools_version(tmp_path) is None


@pytest.mark.unit
def test_default_swift_version_prefers_settings(tmp_path: Path) -> None:
    (tmp_path / "Package.swift").write_text("// swift-tools-version:5.7\n", encoding="utf-8")

    assert plugin.default_swift_version(Settings(working_directory=tmp_path)) == "5.7.0"
    assert (
        plugin.default_swift_version(Settings(working_directory=tmp_path, default_swift_version="5.10"))
        == "5.10"
    )


@pytest.mark.unit
def test_resolve_tool_prefers_explicit_path(mocker: MockerFixture) -> None:
    which = mocker.patch.object(plugin.shutil, "which")

    assert plugin.resolve_tool("swiftformat", Path("/opt/swiftformat")) == "/opt/swiftformat"
    which.assert_not_called()


@pytest.mark.unit
def test_resolve_tool_looks_up_path(mocker: MockerFixture) -> None:
    mocker.patch.object(plugin.shutil, "which", return_value="/usr/local/bin/swiftformat")

    assert plugin.resolve_tool("swiftformat") == "/usr/local/bin/swiftformat"


@pytest.mark.unit
def test_resolve_tool_missing_raises(mocker: MockerFixture) -> None:
    mocker.patch.object(plugin.shutil, "which", return_value=None)

    with pytest.raises(ToolNotFoundError) as exc_info:
        plugin.resolve_tool("kipple-file-provider")

    assert exc_info.value.name == "kipple-file-provider"


def _debug_text(scope: list[str]) -> str:
    out = io.StringIO()
    plugin.write_debug_info(
        out,
        executable="/tools/swiftformat",
        swift_version="5.9.0",
        configuration_path="/cfg/.swiftformat",
        options=ExtractedOptions(debug=True, staged_only=True, targets=[]),
        scope=scope,
        arguments=["--debug", "--staged-only"],
    )
    return out.getvalue()


@pytest.mark.unit
def test_write_debug_info_lists_resolved_values() -> None:
    text = _debug_text(["A.swift", "B.swift"])

    assert "DEBUG INFO" in text
    assert "=> Executable Path:       /tools/swiftformat" in text
    assert "=> Swift Version:         5.9.0" in text
    assert "=> Configuration File:    /cfg/.swiftformat" in text
    assert "=> Staged Files Only?:    True" in text
    assert "     - A.swift\n     - B.swift" in text
    assert "['--debug', '--staged-only']" in text


@pytest.mark.unit
def test_write_debug_info_single_and_empty_scope() -> None:
    assert "=> Formatted File Paths:  ." in _debug_text(["."])
    assert "=> Formatted File Paths:  ?" in _debug_text([])
