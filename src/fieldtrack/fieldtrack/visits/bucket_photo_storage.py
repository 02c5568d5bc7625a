from __future__ import annotations

import secrets
import string
from typing import Callable, Optional

from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_utc
from ..core.constants import PHOTO_PATH_PREFIX
from ..store.bucket_storage import BucketStorage
from .model import PhotoUpload
from .photo_storage import PhotoStorage

_TOKEN_ALPHABET = string.digits + string.ascii_lowercase


def random_token(length: int = 6) -> str:
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(length))


def file_extension(filename: str) -> str:
    name = secure_filename(filename or "")
    if "." not in name:
        return "bin"
    return name.rsplit(".", 1)[-1].lower() or "bin"


def build_photo_path(filename: str, *, timestamp_ms: int, token: str) -> str:
    """`visits/<epoch millis>_<random>.<extension>`"""
    return f"{PHOTO_PATH_PREFIX}/{timestamp_ms}_{token}.{file_extension(filename)}"


class BucketPhotoStorage(PhotoStorage):
    def __init__(
        self,
        storage: BucketStorage,
        *,
        clock: Callable = now_utc,
        token_factory: Optional[Callable[[], str]] = None,
    ):
        self._storage = storage
        self._clock = clock
        self._token_factory = token_factory or random_token

    def save(self, photo: PhotoUpload) -> str:
        timestamp_ms = int(self._clock().timestamp() * 1000)
        path = build_photo_path(photo.filename, timestamp_ms=timestamp_ms, token=self._token_factory())
        self._storage.upload(path, photo.data, content_type=photo.content_type)
        return self._storage.public_url(path)
