"""Utility functions used in multiple tests."""

import os
from unittest.mock import patch

from junitguard import config


# Directory holding test data files
DATADIR = 'data'


def data_file(fn: str) -> str:
    """Return the path to a given test data file."""
    return os.path.join(os.path.dirname(__file__), DATADIR, fn)


def read_data(fn: str) -> str:
    """Return the contents of the given test data file."""
    with open(data_file(fn), encoding='utf-8') as f:
        return f.read()


def write_file(path: str, contents: str):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(contents)


def patch_config_get(key: str, value):
    """Mock config.get() to return a specific value for a given key.

    All other keys return the originally-configured value. Multiple items can be overridden by
    calling this more than once, but each call must be made within the context of the previous
    one so that it can see the mock installed by it.
    """
    def side_effect(k: str):
        return value if k == key else orig_get(k)

    # Use the original (or the previously-patched) get() for unmatched keys
    orig_get = config.get
    return patch('junitguard.config.get', side_effect=side_effect)
