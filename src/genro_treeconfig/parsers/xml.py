# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""XML reader and writer for configuration trees, backed by lxml.

A configuration tree is an lxml ElementTree. parse_tree() keeps everything
the document holds (comments, processing instructions, namespaces), so
that serialize_tree() writes back what was read, plus any edits.

Example:
    >>> tree = parse_tree(b'<config><master>True</master></config>')
    >>> tree.getroot()[0].text
    'True'
    >>> serialize_tree(tree, XmlOptions(xml_declaration=False))
    b'<config><master>True</master></config>'
"""

from __future__ import annotations

from dataclasses import dataclass

import lxml.etree

from ..exceptions import ParseError

Tree = lxml.etree._ElementTree


@dataclass
class XmlOptions:
    """Serialization settings."""
    encoding: str = 'utf-8'
    xml_declaration: bool = True
    pretty_print: bool = False


def _make_parser() -> lxml.etree.XMLParser:
    return lxml.etree.XMLParser(
        no_network=True,
        resolve_entities=False,
        remove_blank_text=False,
        remove_comments=False,
    )


def parse_tree(data: bytes) -> Tree:
    """Parse an XML document into a Tree.

    Args:
        data: Raw document bytes; the encoding is taken from the XML
            declaration (UTF-8 when absent).

    Raises:
        ParseError: If the document is not well-formed.
    """
    try:
        root = lxml.etree.fromstring(data, parser=_make_parser())
    except (lxml.etree.XMLSyntaxError, ValueError) as exc:
        raise ParseError(f"Malformed document: {exc}") from exc
    return root.getroottree()


def serialize_tree(tree: Tree, options: XmlOptions | None = None) -> bytes:
    """Serialize a Tree to XML bytes, keeping node and attribute order.

    Args:
        tree: The tree to write.
        options: Serialization settings, defaults to XmlOptions().
    """
    options = options or XmlOptions()
    return lxml.etree.tostring(
        tree,
        encoding=options.encoding,
        xml_declaration=options.xml_declaration,
        pretty_print=options.pretty_print,
    )
