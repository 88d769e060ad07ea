from fitweek.config import Settings
from fitweek.data_access.backend import build_backend
from fitweek.data_access.blob_store import LocalBlobStore
from fitweek.data_access.json_dal import JsonDal
from fitweek.infra.storage_client import HttpBlobStore

DB_ENV = ("DATABASE_URL", "POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_DB", "DB_HOST_OVERRIDE")


def _settings(monkeypatch, tmp_path, **values):
    for name in DB_ENV + ("STORAGE_BUCKET", "STORAGE_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None, PROJECT_ROOT=tmp_path, **values)


def test_json_backend_is_always_configured(monkeypatch, tmp_path):
    backend = build_backend(_settings(monkeypatch, tmp_path))
    assert backend.configured is True
    assert isinstance(backend.dal, JsonDal)
    assert backend.dal.root == tmp_path / "data/store"
    assert isinstance(backend.blobs, LocalBlobStore)


def test_postgres_without_url_is_not_configured(monkeypatch, tmp_path):
    config = _settings(monkeypatch, tmp_path, STORE_BACKEND="postgres")
    assert config.DATABASE_URL is None
    assert config.backend_configured is False
    assert build_backend(config) == (False, None, None)


def test_database_url_built_from_parts(monkeypatch, tmp_path):
    config = _settings(
        monkeypatch,
        tmp_path,
        STORE_BACKEND="postgres",
        POSTGRES_USER="fit",
        POSTGRES_PASSWORD="p@ss#1",
        POSTGRES_HOST="db",
        POSTGRES_DB="fitweek",
    )
    assert config.DATABASE_URL == "postgresql://fit:p%40ss%231@db:5432/fitweek"
    assert config.backend_configured is True


def test_storage_credentials_select_http_blob_store(monkeypatch, tmp_path):
    backend = build_backend(_settings(monkeypatch, tmp_path, STORAGE_BUCKET="bucket", STORAGE_TOKEN="tok"))
    assert isinstance(backend.blobs, HttpBlobStore)
    assert backend.blobs.bucket == "bucket"
