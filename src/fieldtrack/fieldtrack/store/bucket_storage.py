from __future__ import annotations

from typing import Optional

from .connection import StoreConnection


class BucketStorage:
    """Object storage bucket on the hosted store (upload + public URL)."""

    def __init__(self, conn: StoreConnection, bucket: Optional[str] = None):
        self._conn = conn
        self._bucket = bucket or conn.config.bucket

    @property
    def bucket(self) -> str:
        return self._bucket

    def upload(self, path: str, data: bytes, *, content_type: Optional[str] = None) -> str:
        headers = {"Content-Type": content_type or "application/octet-stream", "x-upsert": "false"}
        self._conn.request("POST", self._conn.storage_url(self._bucket, path), data=data, headers=headers)
        return path

    def public_url(self, path: str) -> str:
        return self._conn.storage_url("public", self._bucket, path)
