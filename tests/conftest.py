import pytest

from fitweek.config import settings
from fitweek.data_access.json_dal import JsonDal


@pytest.fixture(autouse=True)
def isolated_root(tmp_path, monkeypatch):
    # Keep logs, documents and blobs inside the test's temp directory
    monkeypatch.setattr(settings, "PROJECT_ROOT", tmp_path)
    monkeypatch.setattr(settings, "STORE_BACKEND", "json")
    return tmp_path


@pytest.fixture
def dal():
    return JsonDal()
