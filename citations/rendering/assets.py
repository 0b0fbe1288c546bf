"""Logo and signature images with an explicit acquire/release lifetime."""
from __future__ import annotations

import base64
import logging
import mimetypes
import os
import tempfile
import weakref
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetHandle:
    """A temporary file holding one uploaded image."""

    name: str
    path: Path

    @property
    def mime_type(self) -> str:
        return mimetypes.guess_type(self.name)[0] or "image/png"

    def open_image(self) -> Image.Image:
        with Image.open(self.path) as image:
            return image.convert("RGBA")

    def data_uri(self) -> str:
        encoded = base64.b64encode(self.path.read_bytes()).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class AssetSlot:
    """Owns at most one handle; the previous one is released before a new one exists."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.handle: Optional[AssetHandle] = None

    def replace(self, data: Optional[bytes], name: str = "") -> Optional[AssetHandle]:
        self.release()
        if not data:
            return None
        suffix = Path(name).suffix or ".png"
        fd, raw_path = tempfile.mkstemp(prefix=f"citations-{self.label}-", suffix=suffix)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        self.handle = AssetHandle(name=name or f"{self.label}{suffix}", path=Path(raw_path))
        logger.debug("Acquired %s asset at %s", self.label, raw_path)
        return self.handle

    def release(self) -> None:
        if self.handle is None:
            return
        path = self.handle.path
        self.handle = None
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        logger.debug("Released %s asset at %s", self.label, path)


def _release_slots(*slots: AssetSlot) -> None:
    for slot in slots:
        slot.release()


class AssetStore:
    """Logo and signature slots; closing the store releases both.

    A store that is garbage collected, or still alive at interpreter exit,
    releases its files as well.
    """

    def __init__(self) -> None:
        self.logo = AssetSlot("logo")
        self.signature = AssetSlot("signature")
        weakref.finalize(self, _release_slots, self.logo, self.signature)

    def close(self) -> None:
        _release_slots(self.logo, self.signature)

    def __enter__(self) -> "AssetStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
