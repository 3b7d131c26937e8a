# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Case-folded shadow tree for case-insensitive queries."""

from __future__ import annotations

import copy
import logging

import lxml.etree

from .parsers import Tree

logger = logging.getLogger(__name__)


class CaseFoldedView:
    """Lazily built, cached copy of a tree with every name lower-cased.

    The view is keyed by the identity of the source tree: asking for a
    different tree rebuilds it, asking again for the same tree returns the
    cached copy. In-place changes to the source are not tracked; call
    invalidate() after renaming elements or attributes, or after changing
    values that case-insensitive lookups must see.

    Element and attribute names are reduced to their lower-cased local
    name, so the view carries no namespaces. Attributes whose names then
    coincide collapse into one; the last one in document order wins.

    Example:
        >>> view = CaseFoldedView()
        >>> folded = view.get(tree)
        >>> view.get(tree) is folded
        True
        >>> view.build_count
        1
    """

    __slots__ = ('_source', '_view', 'build_count')

    def __init__(self) -> None:
        self._source: Tree | None = None
        self._view: Tree | None = None
        self.build_count = 0

    def get(self, tree: Tree) -> Tree:
        """Return the folded copy of tree, building it on first use."""
        if self._view is None or self._source is not tree:
            self._view = self._build(tree)
            self._source = tree
        return self._view

    def invalidate(self) -> None:
        """Drop the cached view; the next get() rebuilds it."""
        self._source = None
        self._view = None

    @property
    def is_built(self) -> bool:
        return self._view is not None

    def _build(self, tree: Tree) -> Tree:
        folded = copy.deepcopy(tree)
        for element in folded.iter(lxml.etree.Element):
            element.tag = lxml.etree.QName(element).localname.lower()
            attrs = [
                (lxml.etree.QName(name).localname.lower(), value)
                for name, value in element.attrib.items()
            ]
            element.attrib.clear()
            for name, value in attrs:
                element.set(name, value)
        lxml.etree.cleanup_namespaces(folded)
        self.build_count += 1
        logger.debug("Built case-folded view of %r (build #%d)", tree, self.build_count)
        return folded
