import os
import sys

import pytest

# Ensure imports like `from advisor.main import app` work when pytest is run from repo root
BACKEND_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from advisor.crs.resolver import PathResolver, get_resolver  # noqa: E402
from catalog import loader  # noqa: E402
from tests.catalogs import japan_catalog  # noqa: E402


@pytest.fixture
def resolver():
    return PathResolver()


@pytest.fixture
def jp_catalog():
    return japan_catalog()


@pytest.fixture(autouse=True)
def _reset_process_state():
    # Each test starts from the bundled catalog file and an empty graph cache
    loader.set_catalog(None)
    get_resolver().clear()
    yield
    loader.set_catalog(None)
    get_resolver().clear()
