"""
Brief: Global pytest configuration and shared fixtures.

Inputs:
  - None

Outputs:
  - None
"""

import logging
import os
import sys
from typing import Dict, List

import pytest

# Ensure 'src' is on sys.path so 'wg_allowedips' package is importable in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from wg_allowedips.errors import ResolutionError  # noqa: E402
from wg_allowedips.resolver import Resolver  # noqa: E402


class FakeResolver(Resolver):
    """
    Brief: In-memory resolver used instead of dig and live DNS.

    Inputs:
      - answers: hostname -> list of addresses
      - failures: hostname -> failure message (raises ResolutionError)

    Outputs:
      - Records every hostname passed to resolve() in ``calls``.
    """

    name = "fake"

    def __init__(self, answers=None, failures=None):
        self.answers: Dict[str, List[str]] = dict(answers or {})
        self.failures: Dict[str, str] = dict(failures or {})
        self.calls: List[str] = []

    def resolve(self, hostname):
        self.calls.append(hostname)
        if hostname in self.failures:
            raise ResolutionError(hostname, self.failures[hostname])
        return list(self.answers.get(hostname, []))


@pytest.fixture
def fake_resolver_cls():
    return FakeResolver


@pytest.fixture
def write_file(tmp_path):
    """
    Brief: Factory writing text to a file under tmp_path.

    Inputs:
      - name: file name
      - text: file contents

    Outputs:
      - str path of the written file
    """

    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def reset_root_logging():
    """
    Brief: Drop handlers installed by init_logging and restore the root level.

    Inputs:
      - None

    Outputs:
      - None
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers and not type(h).__module__.startswith("_pytest"):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
