"""Matcher that looks for a run of consecutive lines in text output."""

from __future__ import annotations

import dataclasses
import io
import re
from typing import Any, Protocol, runtime_checkable

_PHASE_PREFIX = re.compile(r"^\[[a-z]+\]\s")
_INDENT = "    "


@runtime_checkable
class _Matcher(Protocol):
    def match(self, actual: Any) -> Any: ...


def _compare(actual: str, expected: Any) -> bool:
    if isinstance(expected, _Matcher):
        return bool(expected.match(actual))
    return actual == expected


def _text(actual: Any) -> str:
    if isinstance(actual, str):
        return actual
    if isinstance(actual, io.StringIO):
        return actual.getvalue()
    if type(actual).__str__ is not object.__str__:
        return str(actual)
    raise TypeError(
        "ContainLinesMatcher requires a string or an object with __str__. "
        f"Got actual: {actual!r}"
    )


def _format_lines(lines: list[str]) -> str:
    return "\n".join(f"{_INDENT}{line}" for line in lines)


def _format_items(items: list[Any]) -> str:
    body = "".join(f"{_INDENT * 2}{item!r},\n" for item in items)
    return f"{_INDENT}[\n{body}{_INDENT}]"


@dataclasses.dataclass(frozen=True)
class ContainLinesMatcher:
    """Matches text that holds the expected lines one directly after another.

    Each expected item is either a value compared for equality or an object
    with a ``match`` method that is called with the line.
    """

    expected: tuple[Any, ...]

    def match(self, actual: Any) -> bool:
        """Return whether the expected lines appear consecutively in ``actual``."""
        window = self._lines(actual)
        index = 0
        while index < len(window):
            if _compare(window[index], self.expected[index]):
                if index + 1 == len(self.expected):
                    return True
                index += 1
            elif len(window) > 1:
                window = window[1:]
                index = 0
            else:
                index += 1
        return False

    def failure_message(self, actual: Any) -> str:
        """Describe why ``actual`` did not contain the expected lines."""
        lines = _format_lines(self._lines(actual))
        missing = self._lines_matching(actual, matching=False)
        if missing:
            return (
                f"Expected\n{lines}\nto contain lines\n{_format_items(list(self.expected))}"
                f"\nbut missing\n{_format_items(missing)}"
            )
        return (
            f"Expected\n{lines}\nto contain lines\n{_format_items(list(self.expected))}"
            "\nall lines appear, but may be misordered"
        )

    def negated_failure_message(self, actual: Any) -> str:
        """Describe which expected lines ``actual`` unexpectedly contained."""
        lines = _format_lines(self._lines(actual))
        included = self._lines_matching(actual, matching=True)
        return (
            f"Expected\n{lines}\nnot to contain lines\n{_format_items(list(self.expected))}"
            f"\nbut includes\n{_format_items(included)}"
        )

    @staticmethod
    def _lines(actual: Any) -> list[str]:
        return [_PHASE_PREFIX.sub("", line) for line in _text(actual).split("\n")]

    def _lines_matching(self, actual: Any, matching: bool) -> list[Any]:
        lines = self._lines(actual)
        selected = []
        for expected in self.expected:
            found = False
            for line in lines:
                try:
                    if _compare(line, expected):
                        found = True
                except Exception:
                    pass
            if found == matching:
                selected.append(expected)
        return selected


def contain_lines(*args: Any) -> ContainLinesMatcher:
    """Build a matcher for the given consecutive lines."""
    if not args:
        raise ValueError("contain_lines requires at least one expected line")
    return ContainLinesMatcher(tuple(args))