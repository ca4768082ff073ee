"""Functions to set up common argument parsers."""

import argparse
import ast
import os
from typing import Optional

from junitguard import config


class ExpandUserPath:
    """argparsing type that checks that a report file or directory is readable.

    User directories with tildes (e.g. ~user/foo) are expanded first. The path is returned
    rather than an open file so that directories can be given as well.
    """

    def __call__(self, path: str) -> str:
        fn = os.path.expanduser(path)
        modebits = os.R_OK | (os.X_OK if os.path.isdir(fn) else 0)
        if not os.access(fn, modebits):
            raise argparse.ArgumentTypeError(f'{fn} does not exist or have permission')
        return fn


class StoreMultipleConstAction(argparse.Action):
    """Store the value of the const to multiple attributes.

    const holds the value to store (defaults to True) and attrs is an iterable
    of attribute names to store the value, in addition to dest.
    """

    def __init__(self,
                 option_strings,
                 dest: str,
                 const: bool = True,
                 attrs: Optional[list[str]] = None,
                 default=None,
                 required: bool = False,
                 help=None):     # noqa: A002
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=const,
            default=default,
            required=required,
            help=help)
        self.attrs = attrs if attrs else []

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, self.const)
        for attr in self.attrs:
            setattr(namespace, attr, self.const)


class OverrideConfigAction(argparse.Action):
    """argparsing action that adds a configuration override."""
    def __init__(self,
                 option_strings,
                 dest: str,
                 default=None,
                 required: bool = False,
                 help=None):     # noqa: A002
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=1,
            default=default,
            required=required,
            metavar='NAME=VALUE',
            help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        for assignment in values:
            try:
                name, rawval = assignment.split('=', 1)
            except ValueError as e:
                raise argparse.ArgumentTypeError(f'Missing = in {assignment}') from e
            # Values are Python literals; a bare word is taken as a string
            try:
                val = ast.literal_eval(rawval) if rawval else ''
            except (ValueError, SyntaxError):
                val = rawval
            config.add_override(name, val)


def arguments_config(parser: argparse.ArgumentParser):
    """Add arguments needed for manipulating the configuration."""
    parser.add_argument(
        '--set',
        action=OverrideConfigAction,
        help='Override a config value')


def arguments_logging(parser: argparse.ArgumentParser):
    """Add arguments needed for logging."""
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show more log messages')
    parser.add_argument(
        '--debug',
        action=StoreMultipleConstAction,
        attrs=['verbose'],
        help='Show debug level log messages')
    parser.add_argument(
        '--level-prefix',
        action='store_true',
        help='Include syslog priority level in log message as <N> prefix')
