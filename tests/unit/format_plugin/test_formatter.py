from __future__ import annotations

import pytest

from format_plugin.config import EXCLUDED_FILES
from format_plugin.formatter import build_formatter_arguments, run_formatter


@pytest.mark.unit
def test_build_formatter_arguments_fixed_order() -> None:
    arguments = build_formatter_arguments(
        ["Sources/A.swift", "Sources/B.swift"],
        swift_version="5.9",
        configuration_path="/cfg/.swiftformat",
        passthrough=["--lint", "--indent", "2"],
    )

    assert arguments == [
        "Sources/A.swift",
        "Sources/B.swift",
        "--swiftversion",
        "5.9",
        "--config",
        "/cfg/.swiftformat",
        "--cache",
        "ignore",
        "--exclude",
        ",".join(EXCLUDED_FILES),
        "--lint",
        "--indent",
        "2",
    ]


@pytest.mark.unit
def test_build_formatter_arguments_with_empty_scope() -> None:
    arguments = build_formatter_arguments([], swift_version="5.7.0", configuration_path="c")

    assert arguments[:2] == ["--swiftversion", "5.7.0"]
    assert arguments[-2:] == ["--exclude", ",".join(EXCLUDED_FILES)]


@pytest.mark.unit
def test_exclude_list_contents() -> None:
    joined = ",".join(EXCLUDED_FILES)

    assert joined.startswith(".build,.swiftpm,**/Package.swift")
    assert "**/*.autogenerated.swift" in EXCLUDED_FILES


@pytest.mark.unit
def test_run_formatter_invokes_executable(make_runner) -> None:
    runner = make_runner({"swiftformat": "1/1 files formatted."})

    result = run_formatter("/tools/swiftformat", [".", "--cache", "ignore"], runner, cwd="/pkg")

    assert result.output == "1/1 files formatted."
    call = runner.call_args.args[0]
    assert call.executable == "/tools/swiftformat"
    assert call.arguments == (".", "--cache", "ignore")
    assert call.cwd == "/pkg"
