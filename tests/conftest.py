from __future__ import annotations

import pytest

from linalgviz.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    # cli.main() installs handlers bound to the captured stderr of one test.
    reset_logging()
