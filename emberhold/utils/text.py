"""
Small text transforms shared by validation and presentation code.
"""

import re

_UPPER_RE = re.compile(r"([A-Z])")
_WORD_RE = re.compile(r"\w\S*")


def to_proper_case(value: str) -> str:
    """
    Convert a camelCase identifier to a capitalized, space-separated label.

    >>> to_proper_case("characterName")
    'Character name'
    """
    spaced = _UPPER_RE.sub(lambda match: f" {match.group(1).lower()}", value)
    return spaced[:1].upper() + spaced[1:]


def to_title_case(value: str) -> str:
    """
    Upper-case the first character of every word and leave the rest untouched.

    A word starts at a word character and runs to the next whitespace, so
    "anne-marie" becomes "Anne-marie" while "Anne-Marie", "McDonald" and
    "GAMEMASTER" come back unchanged.
    """
    return _WORD_RE.sub(lambda match: match.group(0)[:1].upper() + match.group(0)[1:], value)
