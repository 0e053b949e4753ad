"""Consume-once extraction of plugin options from raw command-line tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING, overload

from format_plugin.config import ExtractedOptions

if TYPE_CHECKING:
    from collections.abc import Sequence

LITERAL_SEPARATOR = "--"


class ArgumentExtractor:
    """Cursor over a list of command-line tokens.

    Each accessor removes the tokens it matches, so a token is seen at most
    once and whatever is left over can be forwarded untouched. Tokens after a
    literal ``--`` are never treated as options.
    """

    def __init__(self, arguments: Sequence[str]) -> None:
        tokens = list(arguments)
        if LITERAL_SEPARATOR in tokens:
            index = tokens.index(LITERAL_SEPARATOR)
            self._tokens = tokens[:index]
            self._literals = tokens[index + 1 :]
        else:
            self._tokens = tokens
            self._literals = []

    def _extract(self, name: str) -> list[str]:
        option = f"--{name}"
        prefix = f"{option}="
        values: list[str] = []
        index = 0
        while index < len(self._tokens):
            token = self._tokens[index]
            if token == option:
                del self._tokens[index]
                if index < len(self._tokens):
                    values.append(self._tokens.pop(index))
            elif token.startswith(prefix):
                values.append(token[len(prefix) :])
                del self._tokens[index]
            else:
                index += 1
        return values

    @overload
    def single_option(self, name: str) -> str | None: ...

    @overload
    def single_option(self, name: str, default: str) -> str: ...

    def single_option(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of ``--name``, consuming every occurrence."""
        values = self._extract(name)
        return values[0] if values else default

    def repeated_option(self, name: str, default: Sequence[str] = ()) -> list[str]:
        """Return every value of ``--name``.

        A single occurrence is split on commas, so ``--target a,b`` and
        ``--target a --target b`` are equivalent. Several occurrences are
        returned as given. ``default`` is used when nothing was found.
        """
        values = self._extract(name)
        if len(values) == 1:
            values = [part for part in values[0].split(",") if part]
        return values or list(default)

    def flag(self, name: str) -> bool:
        flag = f"--{name}"
        count = self._tokens.count(flag)
        self._tokens = [token for token in self._tokens if token != flag]
        return count > 0

    def remaining(self) -> list[str]:
        return [*self._tokens, *self._literals]


def extract_options(arguments: Sequence[str]) -> ExtractedOptions:
    """Pull every plugin option out of ``arguments``.

    All recognised options are consumed whether or not they end up being
    used, so none of them leak into the formatter's arguments.

    Args:
        arguments (Sequence[str]): raw tokens typed by the user.

    Returns:
        ExtractedOptions: the recognised values plus the passthrough tokens.
    """
    extractor = ArgumentExtractor(arguments)
    swift_version = extractor.single_option("swiftversion")
    config = extractor.single_option("config")
    config_template = extractor.single_option("config-template")
    debug = extractor.flag("debug")
    staged_only = extractor.flag("staged-only")
    targets = extractor.repeated_option("target")
    return ExtractedOptions(
        config=config,
        config_template=config_template,
        swift_version=swift_version,
        debug=debug,
        staged_only=staged_only,
        targets=targets,
        passthrough=extractor.remaining(),
    )
