# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeConfig exceptions."""

from __future__ import annotations


class TreeConfigError(Exception):
    """Base exception for TreeConfig errors."""

    pass


class InvalidPathError(TreeConfigError, ValueError):
    """Raised when a path expression cannot be compiled or evaluated.

    Attributes:
        path: The offending path expression.
    """

    def __init__(self, message: str, path: str = '') -> None:
        self.path = path
        if path:
            message = f"{message} in {path!r}"
        super().__init__(message)


class ParseError(TreeConfigError, ValueError):
    """Raised when a source document is malformed."""

    pass


class NotFoundError(TreeConfigError, KeyError):
    """Raised when a path resolves to no node at all."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ''


class NodeNotFoundError(NotFoundError):
    """Raised when assigning through a path that matches nothing."""

    pass


class UnsupportedMatchKindError(TreeConfigError, TypeError):
    """Raised when value extraction receives something that is not a match."""

    pass
