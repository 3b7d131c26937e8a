# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Readers and writers turning documents into configuration trees.

Available formats:
- xml: XML documents, via lxml

Example:
    >>> from genro_treeconfig.parsers import parse_tree, serialize_tree
    >>> tree = parse_tree(b'<config><master>True</master></config>')
    >>> serialize_tree(tree)
    b"<?xml version='1.0' encoding='utf-8'?>\\n<config><master>True</master></config>"
"""

from .xml import Tree, XmlOptions, parse_tree, serialize_tree

__all__ = [
    'Tree',
    'XmlOptions',
    'parse_tree',
    'serialize_tree',
]
