"""Parsing of typed navigator commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Command:
    """
    A single parsed instruction.

    ``primary`` is the first token (``None`` for a blank line). ``flags`` holds
    each ``-flag`` with the token that follows it, in first-seen order; a
    repeated flag keeps its last value. Tokens that are neither flags nor flag
    values are kept in ``arguments``.
    """

    primary: Optional[str] = None
    flags: tuple[tuple[str, str], ...] = ()
    arguments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: Optional[str]) -> Command:
        """
        Parse one line of text.

        Never raises: a trailing flag without a value is dropped and an
        empty line yields an empty command.
        """
        tokens = (text or "").split()
        if not tokens:
            return cls()

        parameters: dict[str, str] = {}
        arguments: list[str] = []
        i = 1
        while i < len(tokens):
            token = tokens[i]
            if token.startswith("-"):
                if i + 1 < len(tokens):
                    parameters[token] = tokens[i + 1]
                i += 2
                continue
            arguments.append(token)
            i += 1

        return cls(
            primary=tokens[0],
            flags=tuple(parameters.items()),
            arguments=tuple(arguments),
        )

    @property
    def parameters(self) -> dict[str, str]:
        return dict(self.flags)

    @property
    def is_empty(self) -> bool:
        return self.primary is None

    def get(self, flag: str) -> Optional[str]:
        return self.parameters.get(flag)


def parse_command(text: Optional[str]) -> Command:
    """Parse ``text`` into a :class:`Command`."""
    return Command.parse(text)
