"""Image store factory.

Provides get_image_store() / set_image_store() to swap implementations:
- LocalImageStore writing into UPLOAD_DIR (default)
- MemoryImageStore for testing (``IMAGE_STORE=memory``)
"""

import os

from boutique.storage.local_adapter import LocalImageStore
from boutique.storage.memory_adapter import MemoryImageStore
from boutique.storage.port import ImageStore

_current_store: ImageStore | None = None


def upload_dir() -> str:
    """Upload directory from the environment, falling back to domain config."""
    if os.environ.get("UPLOAD_DIR"):
        return os.environ["UPLOAD_DIR"]

    from boutique.domain import boutique

    custom = boutique.config.get("custom") or {}
    return custom.get("UPLOAD_DIR", "uploads")


def get_image_store() -> ImageStore:
    """Return the current image store, building it from ``IMAGE_STORE`` on first use."""
    global _current_store
    if _current_store is None:
        if os.environ.get("IMAGE_STORE", "local") == "memory":
            _current_store = MemoryImageStore()
        else:
            _current_store = LocalImageStore(upload_dir())
    return _current_store


def set_image_store(store: ImageStore) -> None:
    """Override the active image store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_image_store() -> None:
    """Reset to the default image store."""
    global _current_store
    _current_store = None
