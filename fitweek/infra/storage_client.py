"""
Client for a Firebase-Storage-compatible REST endpoint.
Uploads go to `{STORAGE_API_URL}/{bucket}/o?name=<key>`; the returned metadata
carries the download token used to build the public URL.
"""

from typing import Optional
from urllib.parse import quote

import requests

from fitweek.config import settings
from fitweek.data_access.blob_store import BlobStore
from fitweek.infra.log_utils import log_message


class HttpBlobStore(BlobStore):
    """Blob store backed by the remote storage bucket."""

    def __init__(
        self,
        bucket: Optional[str] = None,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: int = 60,
    ):
        """Initializes the client with credentials from the settings unless given."""
        self.bucket = bucket or settings.STORAGE_BUCKET
        self.token = token or settings.STORAGE_TOKEN
        self.base_url = (base_url or settings.STORAGE_API_URL).rstrip("/")
        self.timeout = timeout

    def _download_url(self, name: str, download_token: Optional[str]) -> str:
        url = f"{self.base_url}/{self.bucket}/o/{quote(name, safe='')}?alt=media"
        if download_token:
            url += f"&token={download_token}"
        return url

    def upload(self, key: str, payload: bytes, content_type: str = "application/octet-stream") -> str:
        url = f"{self.base_url}/{self.bucket}/o"
        r = requests.post(
            url,
            params={"uploadType": "media", "name": key},
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": content_type,
            },
            data=payload,
            timeout=self.timeout,
        )
        r.raise_for_status()
        js = r.json()
        # Tokens come back comma-separated; any of them grants read access
        tokens = (js.get("downloadTokens") or "").split(",")
        download_url = self._download_url(js.get("name", key), tokens[0] or None)
        log_message(f"Uploaded {len(payload)} bytes to {self.bucket}/{key}.")
        return download_url
