"""Logging setup for the command-line programs
"""

import argparse
import logging
import os
import shlex
import sys
from typing import Optional


def calling_program() -> str:
    "Return the name of the program that started us"
    return os.path.basename(sys.argv[0])


def syslog_priority(level: int) -> int:
    "Converts a logging level into a syslog priority"
    if level <= logging.DEBUG:
        return 7  # LOG_DEBUG
    if level <= logging.INFO:
        return 6  # LOG_INFO
    if level <= logging.WARNING:
        return 4  # LOG_WARNING
    if level <= logging.ERROR:
        return 3  # LOG_ERR
    return 2      # LOG_CRIT


class SyslogFormatter(logging.Formatter):
    "Formats log messages with a <N> syslog priority prefix as understood by systemd"

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        return f'<{syslog_priority(record.levelno)}>' + super().format(record)


def setup(args: argparse.Namespace, program: Optional[str] = None, subprogram: str = ''):
    """Set up the logging subsystem according to the --verbose, --debug and --level-prefix
    options.

    program defaults to the program invoking this run.
    subprogram is appended to the program (used to show operating mode)
    """
    if not program:
        program = shlex.quote(calling_program())
    if subprogram:
        program = f'{program}|{subprogram}'
    # Escape percents to pass through format()
    program = program.replace('%', '%%')
    if args.debug:
        level = logging.DEBUG
        fmt = program + ' %(levelno)s %(filename)s: %(message)s'
    elif args.verbose:
        level = logging.INFO
        fmt = program + ' %(filename)s: %(message)s'
    else:
        level = logging.WARNING
        fmt = program + ': %(message)s'
    logging.basicConfig(level=level, format=fmt)
    if args.level_prefix:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(SyslogFormatter(fmt))
