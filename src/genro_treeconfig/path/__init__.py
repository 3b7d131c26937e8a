# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path expressions - compile and evaluate node paths.

The package is organized into:
- parser: Compiling XPath expressions and rewriting them for case folding
- resolver: Evaluation against a Tree

Example:
    >>> from genro_treeconfig.path import PathResolver
    >>> PathResolver().evaluate_first(tree, '/config/master')
    ElementMatch(element=<Element master at 0x...>)
"""

from .parser import build_path_from_segments, casefold_path, compile_path
from .resolver import MatchSequence, PathResolver

__all__ = [
    "compile_path",
    "casefold_path",
    "build_path_from_segments",
    "PathResolver",
    "MatchSequence",
]
