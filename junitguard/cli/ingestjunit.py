"""Ingests JUnit XML report files and shows the combined results."""

import argparse
import json
import logging
import os
import sys
from typing import Iterable

from junitguard import argparsing
from junitguard import config
from junitguard import ingest
from junitguard import log
from junitguard import netreq
from junitguard import summarize
from junitguard.reportdef import Report
from junitguard.resultdef import Err, Ok, Result


def parse_args(args=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Ingest JUnit XML reports and show combined totals')
    argparsing.arguments_logging(parser)
    argparsing.arguments_config(parser)
    parser.add_argument(
        '--url',
        action='append',
        default=[],
        help='URL of a report to download and ingest; use once per URL')
    parser.add_argument(
        '--sort',
        action='store_true',
        default=config.get('sort_paths'),
        help='Ingest the report files in each directory in sorted order')
    parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default=config.get('report_format'),
        help='Specify output format')
    parser.add_argument(
        '-t', '--show-tests',
        action='store_true',
        default=config.get('show_tests'),
        help='Show the tests that did not pass')
    parser.add_argument(
        'paths',
        nargs='*',
        type=argparsing.ExpandUserPath(),
        help='Report files, or directories holding .xml report files')
    return parser.parse_args(args=args)


def ingest_all(paths: Iterable[str], urls: Iterable[str], sort: bool) -> Result[Report]:
    """Ingest files, directories and URLs into one report, stopping at the first error."""
    suites = []
    for path in paths:
        if os.path.isdir(path):
            logging.info('Ingesting directory %s', path)
            result = ingest.ingest_dir(path, sort)
        else:
            logging.info('Ingesting file %s', path)
            result = ingest.ingest_file(path)
        if isinstance(result, Err):
            return result
        suites.extend(result.data.testsuites)

    urls = list(urls)
    if urls:
        with netreq.Session() as session:
            for url in urls:
                logging.info('Ingesting %s', url)
                result = ingest.ingest_url(url, session)
                if isinstance(result, Err):
                    return result
                suites.extend(result.data.testsuites)

    return Ok(ingest.combine_suites(suites))


def main() -> int:
    args = parse_args()
    log.setup(args)

    if not args.paths and not args.url:
        logging.error('No report files, directories or URLs were given')
        return 1

    result = ingest_all(args.paths, args.url, args.sort)
    if isinstance(result, Err):
        logging.error('%s', result)
        return 1

    if args.format == 'json':
        json.dump(summarize.report_as_dict(result.data), sys.stdout, indent=2)
        print()
    else:
        summarize.show_report(result.data, details=args.show_tests)
    return 0


if __name__ == '__main__':
    sys.exit(main())
