"""Shared fixtures: isolate user data files and the logger between tests"""

import pytest

from gerbergen.config import reset_data_manager
from gerbergen.utils.logging import GerberLogger


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Point the user data directory at an empty temp dir"""
    data_dir = tmp_path / "gerbergen-data"
    data_dir.mkdir()
    monkeypatch.setenv("GERBERGEN_DATA_DIR", str(data_dir))
    reset_data_manager()
    yield data_dir
    reset_data_manager()
    GerberLogger.cleanup()
