"""Filesystem image store serving files from ``/uploads``."""

import shutil
import time
from pathlib import Path
from typing import BinaryIO

import structlog

from boutique.storage.port import ImageStore

logger = structlog.get_logger(__name__)

URL_PREFIX = "/uploads"


class LocalImageStore(ImageStore):
    """Writes uploads into ``upload_dir`` as ``<epoch-ms>-<original name>``."""

    def __init__(self, upload_dir: str | Path = "uploads") -> None:
        self.upload_dir = Path(upload_dir)

    def save(self, filename: str, stream: BinaryIO) -> str:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

        stored_name = f"{int(time.time() * 1000)}-{Path(filename or 'upload').name}"
        with open(self.upload_dir / stored_name, "wb") as target:
            shutil.copyfileobj(stream, target)

        logger.info("Image stored", filename=stored_name, upload_dir=str(self.upload_dir))
        return f"{URL_PREFIX}/{stored_name}"
