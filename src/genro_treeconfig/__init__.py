# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TreeConfig - Path-addressed access to hierarchical configuration.

Reads and writes values in XML configuration documents through XPath
expressions evaluated by lxml, with an optional case-insensitive mode.
"""

__version__ = "0.1.0"

from .casefold import CaseFoldedView
from .config import ConfigSequence, TreeConfig
from .exceptions import (
    InvalidPathError,
    NodeNotFoundError,
    NotFoundError,
    ParseError,
    TreeConfigError,
    UnsupportedMatchKindError,
)
from .match import (
    NO_MATCH,
    AttributeMatch,
    ElementMatch,
    MatchResult,
    NoMatch,
    set_value_of,
    value_of,
)
from .parsers import Tree, XmlOptions, parse_tree, serialize_tree
from .path import MatchSequence, PathResolver, build_path_from_segments, casefold_path, compile_path

__all__ = [
    # Core classes
    "TreeConfig",
    "ConfigSequence",
    "Tree",
    # Path evaluation
    "PathResolver",
    "MatchSequence",
    "compile_path",
    "casefold_path",
    "build_path_from_segments",
    "CaseFoldedView",
    # Match results
    "AttributeMatch",
    "ElementMatch",
    "NoMatch",
    "NO_MATCH",
    "MatchResult",
    "value_of",
    "set_value_of",
    # Parsing
    "XmlOptions",
    "parse_tree",
    "serialize_tree",
    # Exceptions
    "TreeConfigError",
    "InvalidPathError",
    "ParseError",
    "NotFoundError",
    "NodeNotFoundError",
    "UnsupportedMatchKindError",
]
