# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Match results and value access.

A path evaluation produces one of three results:
- AttributeMatch: an attribute, identified by name and owning element
- ElementMatch: an element
- NO_MATCH: the single NoMatch instance

value_of() and set_value_of() read and write through a result. Values are
always returned trimmed of leading and trailing whitespace.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import lxml.etree

from .exceptions import UnsupportedMatchKindError

# XPath string-value: all descendant text, comments and PIs excluded
_string_value = lxml.etree.XPath('string()', smart_strings=False)


@dataclass(frozen=True)
class AttributeMatch:
    """An attribute selected by a path.

    name is in lxml's '{namespace}local' form for qualified attributes.
    """
    name: str
    owner: lxml.etree._Element

    @property
    def value(self) -> str:
        return self.owner.get(self.name)


@dataclass(frozen=True)
class ElementMatch:
    """An element selected by a path."""
    element: lxml.etree._Element


class NoMatch:
    """Result of a path that selects nothing. Use the NO_MATCH instance."""

    __slots__ = ()
    _instance: NoMatch | None = None

    def __new__(cls) -> NoMatch:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NO_MATCH'

    def __bool__(self) -> bool:
        return False


NO_MATCH = NoMatch()

MatchResult = Union[AttributeMatch, ElementMatch, NoMatch]


def value_of(match: MatchResult) -> tuple[str | None, bool]:
    """Extract the trimmed string value of a match.

    Args:
        match: Result of a path evaluation.

    Returns:
        Tuple (value, found). value is None when found is False.

    Raises:
        UnsupportedMatchKindError: If match is not a MatchResult.

    Example:
        >>> value_of(resolver.evaluate_first(tree, '/config/master'))
        ('True', True)
    """
    if isinstance(match, AttributeMatch):
        return match.value.strip(), True
    if isinstance(match, ElementMatch):
        return _string_value(match.element).strip(), True
    if isinstance(match, NoMatch):
        return None, False
    raise UnsupportedMatchKindError(
        f"Cannot extract a value from {type(match).__name__}"
    )


def set_value_of(match: MatchResult, value: str) -> bool:
    """Write value through a match, mutating the owning tree in place.

    An attribute gets its value replaced. An element loses all its content
    (child elements and comments included) and keeps value as its only
    text; its attributes and tail are untouched.

    Returns:
        True if something was written, False for NO_MATCH.

    Raises:
        UnsupportedMatchKindError: If match is not a MatchResult.
    """
    if isinstance(match, AttributeMatch):
        match.owner.set(match.name, value)
        return True
    if isinstance(match, ElementMatch):
        del match.element[:]
        match.element.text = value
        return True
    if isinstance(match, NoMatch):
        return False
    raise UnsupportedMatchKindError(
        f"Cannot assign a value through {type(match).__name__}"
    )
