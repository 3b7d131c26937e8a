# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Command line access to configuration files.

Usage:
    genro-treeconfig get settings.xml "/config/master"
    genro-treeconfig get settings.xml "/CONFIG/Master" -i
    genro-treeconfig set settings.xml "/config/tick[@type='origin']" 7 -o out.xml
    genro-treeconfig -n c=urn:cfg set app.config "/c:configuration/c:master" False
    genro-treeconfig elements settings.xml "/config/tick"

Exit status: 0 on success, 1 when the path matches nothing, 2 on a
malformed document or path, or a file that cannot be read or written.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import TreeConfig
from .exceptions import InvalidPathError, NotFoundError, ParseError
from .parsers import XmlOptions, serialize_tree

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def _namespace(text: str) -> tuple[str, str]:
    prefix, sep, uri = text.partition('=')
    if not sep or not prefix or not uri:
        raise argparse.ArgumentTypeError(f"expected PREFIX=URI, got {text!r}")
    return prefix, uri


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='genro-treeconfig',
        description='Read and write values in XML configuration files by path'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('-n', '--namespace', action='append', type=_namespace, default=[],
                        metavar='PREFIX=URI', help='Namespace prefix usable in paths')
    commands = parser.add_subparsers(dest='command', required=True)

    get_cmd = commands.add_parser('get', help='Print the value at a path')
    get_cmd.add_argument('file', help='Configuration file')
    get_cmd.add_argument('path', help='Path expression')
    get_cmd.add_argument('-i', '--ignore-case', action='store_true',
                         help='Match element and attribute names regardless of case')

    set_cmd = commands.add_parser('set', help='Set the value at a path')
    set_cmd.add_argument('file', help='Configuration file')
    set_cmd.add_argument('path', help='Path expression')
    set_cmd.add_argument('value', help='New value')
    set_cmd.add_argument('-o', '--output', help='Write to this file instead of in place')

    elements_cmd = commands.add_parser('elements', help='Print each element matching a path')
    elements_cmd.add_argument('file', help='Configuration file')
    elements_cmd.add_argument('path', help='Path expression')

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        config = TreeConfig.load(args.file, namespaces=dict(args.namespace))
        if args.command == 'get':
            print(config.query(args.path, ignore_case=args.ignore_case))
        elif args.command == 'set':
            config[args.path] = args.value
            config.save(args.output)
            logger.info("Set %s in %s", args.path, args.output or args.file)
        else:
            options = XmlOptions(xml_declaration=False)
            for sub in config.elements(args.path):
                print(serialize_tree(sub.tree, options).decode(options.encoding))
    except NotFoundError as exc:
        print(exc, file=sys.stderr)
        return EXIT_NOT_FOUND
    except (ParseError, InvalidPathError) as exc:
        print(exc, file=sys.stderr)
        return EXIT_ERROR
    except OSError as exc:
        logger.error("%s", exc)
        return EXIT_ERROR
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
