# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Compiling path expressions.

Paths are XPath 1.0 expressions compiled by lxml, e.g.:

    /config/general/interval
    /config/tick[@type='origin']
    //server[@enabled][2]/@host
"""

from __future__ import annotations

import functools
import re

import lxml.etree

from ..exceptions import InvalidPathError

LITERAL_RE = re.compile(r"""('[^']*'|"[^"]*")""")


@functools.lru_cache(maxsize=256)
def _compile(path: str, namespaces: tuple[tuple[str, str], ...]) -> lxml.etree.XPath:
    try:
        return lxml.etree.XPath(path, namespaces=dict(namespaces) or None)
    except lxml.etree.XPathError as exc:
        raise InvalidPathError(str(exc), path) from exc


def compile_path(path: str, namespaces: dict[str, str] | None = None) -> lxml.etree.XPath:
    """Compile a path expression, caching the result.

    Args:
        path: XPath expression.
        namespaces: Optional prefix to URI mapping used by the expression.

    Raises:
        InvalidPathError: If the expression does not compile.
    """
    if not isinstance(path, str):
        raise TypeError(f"path must be str, not {type(path).__name__}")
    return _compile(path, tuple(sorted((namespaces or {}).items())))


def casefold_path(path: str) -> str:
    """Lower-case a path outside its quoted literals.

    Element and attribute names (and keywords such as 'AND') are lowered;
    literal values keep their case.

    Example:
        >>> casefold_path("/Config/Tick[@Type='Origin' Or @ID='X']")
        "/config/tick[@type='Origin' or @id='X']"
    """
    parts = LITERAL_RE.split(path)
    # odd indexes are the captured literals
    return ''.join(
        part if i % 2 else part.lower()
        for i, part in enumerate(parts)
    )


def build_path_from_segments(segments) -> str:
    """Join plain names into an absolute path.

    Segments are not escaped: a segment containing '/' is a caller error
    and the resulting path's meaning is undefined.

    Example:
        >>> build_path_from_segments(['config', 'master'])
        '/config/master'
    """
    return ''.join(f"/{segment}" for segment in segments)
