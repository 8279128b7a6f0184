"""Image store port (abstract interface).

Adapters persist an uploaded image and return the URL under which the API
serves it. Products only ever store that URL.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO


class ImageStore(ABC):
    """Abstract image store interface."""

    @abstractmethod
    def save(self, filename: str, stream: BinaryIO) -> str:
        """Persist the image and return its public URL."""
        ...
