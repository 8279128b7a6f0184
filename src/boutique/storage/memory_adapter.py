"""In-memory image store for development and testing."""

from pathlib import Path
from typing import BinaryIO

from boutique.storage.port import ImageStore


class MemoryImageStore(ImageStore):
    """Keeps uploaded bytes in a dict keyed by URL."""

    def __init__(self) -> None:
        self.images: dict[str, bytes] = {}

    def save(self, filename: str, stream: BinaryIO) -> str:
        url = f"/uploads/{len(self.images) + 1}-{Path(filename or 'upload').name}"
        self.images[url] = stream.read()
        return url
