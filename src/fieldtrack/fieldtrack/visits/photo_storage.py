from __future__ import annotations

from typing import Protocol

from .model import PhotoUpload


class PhotoStorage(Protocol):
    def save(self, photo: PhotoUpload) -> str:
        """Store the photo and return its public URL."""

        raise NotImplementedError
