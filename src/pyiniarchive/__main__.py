# -*- encoding: utf-8 -*-
# @File   : __main__.py
# @Time   : 2024/10/14 15:27:12
# @Author : Kariko Lin

"""Read an INI file and save it again, canonically.

    python -m pyiniarchive rules.ini rules_out.ini --echo
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from .ini import COMMENT_DELIMITERS, IniParser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pyiniarchive',
        description='Read a sectioned INI file and write it back.',
        epilog='Example: pyiniarchive in.ini out.ini --alphabetical --echo'
    )
    parser.add_argument('input', help='INI file to read.')
    parser.add_argument('output', help='where to write the result.')
    parser.add_argument(
        '-a', '--alphabetical', action='store_true',
        help='order sections by name instead of by first appearance.')
    parser.add_argument(
        '-c', '--comments', default=COMMENT_DELIMITERS,
        help=f'chars starting a comment (default: "{COMMENT_DELIMITERS}").')
    parser.add_argument(
        '-e', '--encoding', default=None,
        help='encoding of both files, guessed for input if omitted.')
    parser.add_argument(
        '--echo', action='store_true',
        help='also print the result to stdout.')
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='log every skipped line.')
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    logging.info(f'Input file: {args.input}, output file: {args.output}')
    reader = IniParser(
        args.input, args.encoding,
        alphabetical=args.alphabetical, comment_delimiters=args.comments)
    try:
        archive = reader.read()
    except FileNotFoundError as e:
        logging.error(f'{e}')
        return 1

    if args.echo:
        archive.print(sys.stdout)
    IniParser(args.output, args.encoding).write(archive)
    return 0


if __name__ == '__main__':
    sys.exit(main())
