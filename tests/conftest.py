import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dungeonforge import create_app  # noqa: E402
from dungeonforge.layout.config import LayoutConfig  # noqa: E402

SMALL_DEFAULTS = {"dungeon_size": [40, 30], "divisions": 8, "size_constrain": 6}


@pytest.fixture()
def test_app(tmp_path):
    app = create_app({"TESTING": True, "LAYOUT_DEFAULTS": dict(SMALL_DEFAULTS), "LAYOUT_CACHE_MAX": 8})
    app.instance_path = str(tmp_path)
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_layout_cache():
    from dungeonforge.routes.layout_api import _layout_cache, _layout_cache_lock

    with _layout_cache_lock:
        _layout_cache.clear()
    yield


@pytest.fixture()
def scenario_a():
    """20x20 dungeon split exactly once."""
    return LayoutConfig(dungeon_size=(20, 20), size_constrain=8, divisions=1, subtracted_percent=0)


