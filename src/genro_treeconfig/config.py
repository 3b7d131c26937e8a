# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeConfig - path-addressed access to a configuration document.

This module provides the TreeConfig class, binding together the path
resolver, the value accessors and the case-folded view.

Access styles:
    - Key segments: get_value('config', 'master') reads '/config/master'
    - Path expressions: query("/config/tick[@type='origin']")
    - Indexer: config['/config/master'], config['/config/@version'] = '2'

Missing paths:
    The accessors deliberately differ in how they report a path that
    selects nothing, for compatibility with existing callers:

    ==========================  ===========================
    get_value(*keys)            returns default (None)
    set_value(value, *keys)     returns False
    config[path]                returns None
    query(path, ignore_case)    raises NotFoundError
    config[path] = value        raises NodeNotFoundError
    ==========================  ===========================

Namespaces:
    Case-sensitive paths address namespaced elements through the prefixes
    given as namespaces. Case-insensitive paths run against a view with
    namespaces removed, so they use plain names.

Example:
    >>> config = TreeConfig.from_string('<config><master>True</master></config>')
    >>> config.get_value('config', 'master')
    'True'
    >>> config.set_value('False', 'config', 'master')
    True
    >>> config['/config/master']
    'False'
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from .casefold import CaseFoldedView
from .exceptions import NodeNotFoundError, NotFoundError
from .match import MatchResult, set_value_of, value_of
from .parsers import Tree, XmlOptions, parse_tree, serialize_tree
from .path import MatchSequence, PathResolver, build_path_from_segments, casefold_path

logger = logging.getLogger(__name__)


class TreeConfig:
    """A configuration document addressed by paths.

    TreeConfig is not thread-safe: it mutates its tree in place and caches
    a case-folded copy. Share an instance between threads only behind a
    lock of your own.

    Attributes:
        source_path: File the config was loaded from, or None.
        options: XmlOptions used by save() and to_bytes().
    """

    __slots__ = ('_tree', '_folded', '_resolver', 'source_path', 'options')

    def __init__(
        self,
        tree: Tree,
        source_path: str | Path | None = None,
        options: XmlOptions | None = None,
        namespaces: dict[str, str] | None = None,
    ) -> None:
        """Initialize a TreeConfig.

        Args:
            tree: The configuration tree.
            source_path: Optional file the tree came from; save() writes
                back there by default.
            options: Serialization settings for save() and to_bytes().
            namespaces: Prefix to URI mapping for case-sensitive paths,
                e.g. {'c': 'urn:cfg'} to write '/c:configuration/c:master'.
        """
        self._tree = tree
        self._folded = CaseFoldedView()
        self._resolver = PathResolver(namespaces)
        self.source_path = Path(source_path) if source_path is not None else None
        self.options = options or XmlOptions()

    # ==================== Constructors ====================

    @classmethod
    def load(
        cls,
        file_path: str | Path,
        options: XmlOptions | None = None,
        namespaces: dict[str, str] | None = None,
    ) -> TreeConfig:
        """Read and parse a configuration file.

        Raises:
            ParseError: If the file is not a well-formed document.
            OSError: If the file cannot be read.
        """
        file_path = Path(file_path)
        tree = parse_tree(file_path.read_bytes())
        logger.debug("Loaded %s", file_path)
        return cls(tree, source_path=file_path, options=options, namespaces=namespaces)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        options: XmlOptions | None = None,
        namespaces: dict[str, str] | None = None,
    ) -> TreeConfig:
        """Parse a configuration held in memory."""
        return cls(parse_tree(data), options=options, namespaces=namespaces)

    @classmethod
    def from_string(
        cls,
        text: str,
        options: XmlOptions | None = None,
        namespaces: dict[str, str] | None = None,
    ) -> TreeConfig:
        """Parse a configuration from text (encoded as UTF-8 for parsing)."""
        return cls.from_bytes(text.encode('utf-8'), options=options, namespaces=namespaces)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"TreeConfig({self._tree.getroot().tag!r}, source_path={self.source_path!r})"

    def __getitem__(self, path: str) -> str | None:
        """Return the trimmed value at path, or None if nothing matches.

        Raises:
            InvalidPathError: If path is malformed.
        """
        value, _found = value_of(self._resolver.evaluate_first(self._tree, path))
        return value

    def __setitem__(self, path: str, value: str) -> None:
        """Set the value at path in place.

        Raises:
            NodeNotFoundError: If path matches nothing.
            InvalidPathError: If path is malformed.
        """
        if not set_value_of(self._resolver.evaluate_first(self._tree, path), value):
            raise NodeNotFoundError(f"No node matches {path!r}")

    def __contains__(self, path: str) -> bool:
        return bool(self._resolver.evaluate_first(self._tree, path))

    # ==================== Tree ====================

    @property
    def tree(self) -> Tree:
        """The underlying tree. Assigning a new tree drops the folded view."""
        return self._tree

    @tree.setter
    def tree(self, tree: Tree) -> None:
        self._tree = tree
        self._folded.invalidate()

    @property
    def namespaces(self) -> dict[str, str]:
        return self._resolver.namespaces

    @property
    def folded_view(self) -> CaseFoldedView:
        """The cache backing case-insensitive queries."""
        return self._folded

    # ==================== Segment API ====================

    def get_value(self, *keys: str, default: str | None = None) -> str | None:
        """Get the value at the path made of keys, or default.

        Example:
            >>> config.get_value('config', 'master')
            'True'
        """
        value, found = value_of(self.locate(*keys))
        return value if found else default

    def set_value(self, value: str, *keys: str) -> bool:
        """Set the value at the path made of keys.

        Example:
            >>> config.set_value('False', 'config', 'master')
            True

        Returns:
            True if a node was updated, False if the path matched nothing.
        """
        return set_value_of(self.locate(*keys), value)

    def locate(self, *keys: str) -> MatchResult:
        """Resolve key segments to the first match, case-sensitively."""
        return self._resolver.evaluate_first(self._tree, build_path_from_segments(keys))

    # ==================== Path API ====================

    def query(self, path: str, ignore_case: bool = False) -> str:
        """Get the trimmed value of the first node matching path.

        Args:
            path: Path expression, e.g. "/config/tick[@type='origin']".
            ignore_case: If True, element and attribute names match
                regardless of case. Literal values in predicates are still
                compared exactly.

        Raises:
            NotFoundError: If path matches nothing.
            InvalidPathError: If path is malformed.
        """
        value, found = value_of(self.evaluate(path, ignore_case))
        if not found:
            raise NotFoundError(f"No node matches {path!r}")
        return value

    def evaluate(self, path: str, ignore_case: bool = False) -> MatchResult:
        """Return the first match for path, against the folded view if ignore_case."""
        if not ignore_case:
            return self._resolver.evaluate_first(self._tree, path)
        return _FOLDED_RESOLVER.evaluate_first(self._folded.get(self._tree), casefold_path(path))

    def elements(self, path: str) -> ConfigSequence:
        """Return an independent TreeConfig for each element matching path.

        The result can be iterated more than once; every pass re-evaluates
        path against the current tree. The yielded configs have no source
        path, so save() leaves them alone unless given an explicit file.

        Raises:
            InvalidPathError: If path is malformed or selects attributes.
        """
        return ConfigSequence(self._resolver.evaluate_all(self._tree, path), self)

    # ==================== Persistence ====================

    def to_bytes(self) -> bytes:
        """Serialize the tree with this config's options."""
        return serialize_tree(self._tree, self.options)

    def save(self, file_path: str | Path | None = None) -> bool:
        """Write the document to file_path, or back to the source file.

        Returns:
            True if written, False if there is no destination.

        Raises:
            OSError: If the file cannot be written.
        """
        target = Path(file_path) if file_path is not None else self.source_path
        if target is None:
            logger.warning("Not saving %r: no file path given", self)
            return False
        target.write_bytes(self.to_bytes())
        logger.debug("Saved %s", target)
        return True


class ConfigSequence:
    """Restartable sequence of TreeConfig objects, one per matching element."""

    __slots__ = ('_matches', '_parent')

    def __init__(self, matches: MatchSequence, parent: TreeConfig) -> None:
        self._matches = matches
        self._parent = parent

    def __repr__(self) -> str:
        return f"ConfigSequence({self._matches!r})"

    def __iter__(self) -> Iterator[TreeConfig]:
        for tree in self._matches:
            yield TreeConfig(
                tree,
                options=self._parent.options,
                namespaces=self._parent.namespaces,
            )


# Folded views carry no namespaces, so one shared resolver serves them all
_FOLDED_RESOLVER = PathResolver()
