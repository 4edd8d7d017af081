"""
Grammar elements are plain strings inside an option:

    "if        literal, matches the token ``if`` exactly
    /[0-9]+/   pattern, the regex must match the whole token
    expr       anything else names another rule, looked up when reached
"""

import re
from typing import NamedTuple, Optional, Union

from .errors import TokenError

LITERAL_PREFIX = '"'
PATTERN_DELIMITER = "/"


class Literal(NamedTuple):
    text: str

    def matches(self, token: Optional[str]) -> bool:
        return token is not None and token == self.text


class Pattern(NamedTuple):
    regex: re.Pattern

    def matches(self, token: Optional[str]) -> bool:
        # an absent token is accepted when the pattern can match nothing,
        # so patterns like /a*/ may close an option at end of input
        if token is None:
            return self.regex.fullmatch("") is not None
        return self.regex.fullmatch(token) is not None


class RuleReference(NamedTuple):
    name: str


Element = Union[Literal, Pattern, RuleReference]


def is_literal(element: str) -> bool:
    return element[:1] == LITERAL_PREFIX


def is_pattern(element: str) -> bool:
    return (
        len(element) >= 2
        and element[0] == PATTERN_DELIMITER
        and element[-1] == PATTERN_DELIMITER
    )


def compile_pattern(element: str) -> re.Pattern:
    body = element[1:-1]
    if not body:
        raise TokenError(f"empty pattern {element!r}")
    try:
        return re.compile(body)
    except re.error as e:
        raise TokenError(f"invalid pattern {element!r}: {e}") from e


def classify(element: str) -> Element:
    if is_literal(element):
        return Literal(element[len(LITERAL_PREFIX) :])
    if is_pattern(element):
        return Pattern(compile_pattern(element))
    return RuleReference(element)


def matches_literal(element: str, token: Optional[str]) -> bool:
    return is_literal(element) and classify(element).matches(token)


def matches_pattern(element: str, token: Optional[str]) -> bool:
    return is_pattern(element) and classify(element).matches(token)
