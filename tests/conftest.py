from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from format_plugin.config import ProcessInvocation, ProcessResult

if TYPE_CHECKING:
    from collections.abc import Callable
    from unittest.mock import Mock

    from pytest_mock import MockerFixture

    RunnerFactory = Callable[..., Mock]


@pytest.fixture
def make_runner(mocker: MockerFixture) -> RunnerFactory:
    """Build a mock process runner.

    ``responses`` maps a substring of the command line to either the output
    to return or an exception to raise. The first matching entry wins;
    unmatched calls succeed with empty output.
    """

    def factory(responses: dict[str, str | Exception] | None = None) -> Mock:
        table = responses or {}

        def respond(call: ProcessInvocation) -> ProcessResult:
            for pattern, response in table.items():
                if pattern in call.command_line:
                    if isinstance(response, Exception):
                        raise response
                    return ProcessResult(output=response)
            return ProcessResult()

        return mocker.Mock(side_effect=respond)

    return factory
