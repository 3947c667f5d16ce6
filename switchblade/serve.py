"""Matcher that checks what a deployment serves over HTTP."""

from __future__ import annotations

import dataclasses
import ipaddress
import re
import urllib.error
import urllib.request
from http import HTTPStatus
from typing import Any
from urllib.parse import urlsplit, urlunsplit

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _parse(url: str):
    bad = _BAD_ESCAPE.search(url)
    if bad:
        escape = url[bad.start() : bad.start() + 3]
        raise ValueError(f'parse "{url}": invalid URL escape "{escape}"')
    return urlsplit(url)


def _is_loopback(host: str | None) -> bool:
    if not host:
        return False
    if host == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def _compare(actual: str, expected: Any) -> bool:
    matcher = getattr(expected, "match", None)
    if callable(matcher) and not isinstance(expected, str):
        return bool(matcher(actual))
    return actual == expected


@dataclasses.dataclass
class ServeMatcher:
    """Matches a deployment whose endpoint answers 200 with the expected body."""

    expected: Any
    endpoint: str = ""
    response: str = dataclasses.field(default="", init=False)

    def with_endpoint(self, endpoint: str) -> ServeMatcher:
        """Request ``endpoint`` instead of the root path."""
        self.endpoint = endpoint
        return self

    def match(self, actual: Any) -> bool:
        """Fetch the deployment's endpoint and compare the body with the expectation."""
        url = getattr(actual, "external_url", None)
        if not isinstance(url, str):
            raise TypeError(
                f"ServeMatcher expects a deployment, received {type(actual).__name__}"
            )

        parts = _parse(url)
        target = urlunsplit(parts._replace(path=self.endpoint))
        if parts.scheme not in ("http", "https"):
            raise ValueError(
                f'Get "{target}": unsupported protocol scheme "{parts.scheme}"'
            )

        opener = (
            urllib.request.build_opener(urllib.request.ProxyHandler({}))
            if _is_loopback(parts.hostname)
            else urllib.request.build_opener()
        )
        try:
            with opener.open(target) as response:
                status = response.status
                content = response.read()
        except urllib.error.HTTPError as err:
            with err:
                status = err.code
                content = err.read()

        self.response = content.decode("utf-8", errors="replace")
        if status != HTTPStatus.OK:
            return False
        return _compare(self.response, self.expected)

    def failure_message(self, actual: Any) -> str:
        """Describe the mismatch between the response and the expectation."""
        return (
            "Expected the response from deployment:\n\n"
            f"\t{self.response}\n\nto contain:\n\n\t{self.expected}"
        )

    def negated_failure_message(self, actual: Any) -> str:
        """Describe an unexpected match between the response and the expectation."""
        return (
            "Expected the response from deployment:\n\n"
            f"\t{self.response}\n\nnot to contain:\n\n\t{self.expected}"
        )


def serve(expected: Any) -> ServeMatcher:
    """Build a matcher for a deployment that serves ``expected``."""
    return ServeMatcher(expected)