# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path evaluation against a Tree.

Paths are evaluated by lxml's XPath engine, which returns node-sets in
document order. Results are mapped onto AttributeMatch / ElementMatch;
expressions selecting anything else (text nodes, comments, numbers,
booleans) are rejected with InvalidPathError.
"""

from __future__ import annotations

import copy
from typing import Iterator, Union

import lxml.etree

from ..exceptions import InvalidPathError
from ..match import NO_MATCH, AttributeMatch, ElementMatch, MatchResult
from ..parsers import Tree
from .parser import build_path_from_segments, compile_path

Selected = Union[lxml.etree._Element, AttributeMatch]


class PathResolver:
    """Evaluates path expressions against trees.

    Attributes:
        namespaces: Prefix to URI mapping available to expressions.

    Example:
        >>> resolver = PathResolver()
        >>> match = resolver.evaluate_first(tree, "/config/tick[@type='origin']")
        >>> value_of(match)
        ('5', True)
    """

    __slots__ = ('namespaces',)

    build_path_from_segments = staticmethod(build_path_from_segments)

    def __init__(self, namespaces: dict[str, str] | None = None) -> None:
        self.namespaces = dict(namespaces or {})

    def evaluate_first(self, tree: Tree, path: str) -> MatchResult:
        """Return the first match in document order, or NO_MATCH.

        Raises:
            InvalidPathError: If path is malformed or selects neither
                elements nor attributes.
        """
        selected = next(self.iter_selected(tree, path), None)
        if selected is None:
            return NO_MATCH
        if isinstance(selected, AttributeMatch):
            return selected
        return ElementMatch(selected)

    def evaluate_all(self, tree: Tree, path: str) -> MatchSequence:
        """Return a lazy, restartable sequence of matching elements.

        Each element is yielded as an independent Tree rooted at a copy of
        the match, so mutating a result never touches the source tree or
        the other results.

        Raises:
            InvalidPathError: If path is malformed or selects attributes.
        """
        # fail here rather than on first iteration
        for item in self.iter_selected(tree, path):
            if isinstance(item, AttributeMatch):
                raise InvalidPathError("Path selects attributes, not elements", path)
        return MatchSequence(self, tree, path)

    def iter_selected(self, tree: Tree, path: str) -> Iterator[Selected]:
        """Yield selected elements (or AttributeMatch objects) in document order."""
        return iter([self._convert(item, path) for item in self._evaluate(tree, path)])

    def _evaluate(self, tree: Tree, path: str) -> list:
        xpath = compile_path(path, self.namespaces)
        try:
            result = xpath(tree)
        except lxml.etree.XPathError as exc:
            raise InvalidPathError(str(exc), path) from exc
        if not isinstance(result, list):
            raise InvalidPathError(
                f"Expression yields {type(result).__name__}, not nodes", path
            )
        return result

    def _convert(self, item, path: str) -> Selected:
        if isinstance(item, lxml.etree._Element) and isinstance(item.tag, str):
            return item
        if getattr(item, 'is_attribute', False):
            return AttributeMatch(item.attrname, item.getparent())
        raise InvalidPathError(
            "Expression must select elements or attributes", path
        )


class MatchSequence:
    """Restartable lazy sequence of element matches, each as its own Tree.

    Every iteration re-evaluates the path against the current state of the
    source tree; copies are made one at a time as the sequence is consumed.
    """

    __slots__ = ('_resolver', '_tree', '_path')

    def __init__(self, resolver: PathResolver, tree: Tree, path: str) -> None:
        self._resolver = resolver
        self._tree = tree
        self._path = path

    def __repr__(self) -> str:
        return f"MatchSequence({self._path!r})"

    def __iter__(self) -> Iterator[Tree]:
        for item in self._resolver.iter_selected(self._tree, self._path):
            if isinstance(item, AttributeMatch):
                raise InvalidPathError("Path selects attributes, not elements", self._path)
            element = copy.deepcopy(item)
            element.tail = None
            yield element.getroottree()
