"""Builds the storage collaborators from an explicit Settings object."""

from typing import NamedTuple, Optional

from fitweek.config import Settings
from fitweek.data_access.blob_store import BlobStore, LocalBlobStore
from fitweek.data_access.dal import DataAccessLayer
from fitweek.data_access.json_dal import JsonDal
from fitweek.infra import log_utils


class Backend(NamedTuple):
    configured: bool
    dal: Optional[DataAccessLayer]
    blobs: Optional[BlobStore]


def build_backend(config: Settings) -> Backend:
    """
    Select the DAL and blob store for `config`.

    An unconfigured backend is reported through `Backend.configured` and leaves
    both collaborators as None; callers check the flag before doing any work.
    """
    if not config.backend_configured:
        log_utils.log_message(
            f"Backend '{config.STORE_BACKEND}' is not configured; storage features disabled.", "WARN"
        )
        return Backend(False, None, None)

    if config.STORE_BACKEND == "postgres":
        from fitweek.data_access.postgres_dal import PostgresDal

        dal: DataAccessLayer = PostgresDal(conninfo=config.DATABASE_URL)
    else:
        dal = JsonDal(config.store_path)

    if config.storage_configured:
        from fitweek.infra.storage_client import HttpBlobStore

        blobs: BlobStore = HttpBlobStore(
            bucket=config.STORAGE_BUCKET,
            token=config.STORAGE_TOKEN,
            base_url=config.STORAGE_API_URL,
        )
    else:
        blobs = LocalBlobStore(config.blob_path)

    return Backend(True, dal, blobs)
