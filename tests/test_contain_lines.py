import io
import re

import pytest

from switchblade.contain_lines import ContainLinesMatcher, contain_lines


class MatchRegexp:
    def __init__(self, pattern):
        self.pattern = pattern

    def match(self, actual):
        return re.search(self.pattern, actual) is not None

    def __repr__(self):
        return f"MatchRegexp({self.pattern!r})"


class HavePrefix:
    def __init__(self, prefix):
        self.prefix = prefix

    def match(self, actual):
        return actual.startswith(self.prefix)

    def __repr__(self):
        return f"HavePrefix({self.prefix!r})"


class ContainSubstring:
    def __init__(self, substr):
        self.substr = substr

    def match(self, actual):
        return self.substr in actual

    def __repr__(self):
        return f"ContainSubstring({self.substr!r})"


class Broken:
    def match(self, actual):
        raise ValueError("MatchJSONMatcher matcher requires a string")


class Stringer:
    def __init__(self, text):
        self.text = text

    def __str__(self):
        return self.text


ORDINALS = ("zeroth", "first", "second", "third", "fourth", "fifth", "sixth", "seventh")
SOME, OTHER, ANOTHER = "some-line-content", "other-line-content", "another-line-content"


def _log(count, replacements=None):
    """Build a newline-joined log of numbered lines, replacing some by position."""
    replacements = replacements or {}
    return "\n".join(
        replacements.get(position, f"{ordinal}-line")
        for position, ordinal in enumerate(ORDINALS[:count])
    )


MATCHING = _log(6, {3: SOME})
NOT_MATCHING = _log(6)
MULTI_MATCHING = _log(8, {3: SOME, 4: OTHER, 5: ANOTHER})
MULTI_NOT_MATCHING = _log(8)


def test_single_line_string_matches():
    assert contain_lines(SOME).match(MATCHING) is True


def test_single_line_string_does_not_match():
    assert contain_lines(SOME).match(NOT_MATCHING) is False


def test_single_line_string_io_matches():
    assert contain_lines(SOME).match(io.StringIO(MATCHING)) is True


def test_single_line_string_io_does_not_match():
    assert contain_lines(SOME).match(io.StringIO(NOT_MATCHING)) is False


def test_stringer_object_matches():
    assert contain_lines(SOME).match(Stringer(MATCHING)) is True


def test_multiple_lines_match():
    matcher = contain_lines(SOME, OTHER, ANOTHER)
    assert matcher.match(io.StringIO(MULTI_MATCHING)) is True


def test_multiple_lines_do_not_match():
    matcher = contain_lines(SOME, OTHER, ANOTHER)
    assert matcher.match(io.StringIO(MULTI_NOT_MATCHING)) is False


def test_multiple_lines_out_of_order_do_not_match():
    matcher = contain_lines(OTHER, SOME)
    assert matcher.match(MULTI_MATCHING) is False


def _submatcher():
    return contain_lines(
        MatchRegexp(r"some\-.+\-content"),
        HavePrefix("other-line"),
        ContainSubstring("other-line-con"),
    )


def test_submatchers_match():
    assert _submatcher().match(MULTI_MATCHING) is True


def test_submatchers_with_line_prefixes_match():
    stages = ["detector"] + ["builder"] * 5 + ["analyzer", "exporter"]
    actual = "\n".join(
        f"[{stage}] {line}" for stage, line in zip(stages, MULTI_MATCHING.split("\n"))
    )
    assert _submatcher().match(actual) is True


def test_submatchers_do_not_match():
    assert _submatcher().match(MULTI_NOT_MATCHING) is False


def test_actual_not_text_raises():
    with pytest.raises(TypeError, match="ContainLinesMatcher requires a string"):
        contain_lines(SOME).match(object())


def test_submatcher_error_propagates():
    with pytest.raises(ValueError, match="MatchJSONMatcher matcher requires"):
        contain_lines(Broken()).match(SOME)


def test_requires_expected_lines():
    with pytest.raises(ValueError):
        contain_lines()


def test_contain_lines_builds_matcher():
    assert contain_lines("a", "b") == ContainLinesMatcher(("a", "b"))


def _four():
    return contain_lines(
        SOME,
        MatchRegexp(r"some\-.+\-content"),
        HavePrefix("third"),
        ContainSubstring("other-line-con"),
    )


def _listing(items):
    return "    [\n" + "".join(f"        {item},\n" for item in items) + "    ]"


REGEXP_ITEM = "MatchRegexp('some\\\\-.+\\\\-content')"
PREFIX_ITEM = "HavePrefix('third')"
SUBSTRING_ITEM = "ContainSubstring('other-line-con')"
EXPECTED_ITEMS = _listing(["'some-line-content'", REGEXP_ITEM, PREFIX_ITEM, SUBSTRING_ITEM])
ACTUAL_LINES = "\n".join("    " + line for line in NOT_MATCHING.split("\n"))


def test_failure_message():
    message = _four().failure_message(NOT_MATCHING)
    assert message == (
        "Expected\n"
        + ACTUAL_LINES
        + "\nto contain lines\n"
        + EXPECTED_ITEMS
        + "\nbut missing\n"
        + _listing(["'some-line-content'", REGEXP_ITEM, SUBSTRING_ITEM])
    )


def test_failure_message_misordered():
    actual = _log(6, {1: "some-stuff-content", 2: SOME, 4: OTHER})
    assert "all lines appear, but may be misordered" in _four().failure_message(actual)


def test_negated_failure_message():
    message = _four().negated_failure_message(NOT_MATCHING)
    assert message == (
        "Expected\n"
        + ACTUAL_LINES
        + "\nnot to contain lines\n"
        + EXPECTED_ITEMS
        + "\nbut includes\n"
        + _listing([PREFIX_ITEM])
    )