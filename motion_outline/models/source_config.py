"""
models/source_config.py
Konfigurasi sumber video yang dipilih user (file atau webcam).
Dibuat sekali sebelum loop utama dan tidak berubah setelahnya.
"""
from enum import IntEnum
from typing import NamedTuple, Optional

DEFAULT_CAMERA_INDEX = 0


class SourceKind(IntEnum):
    """Pilihan sumber, nilainya sama dengan angka yang diketik di prompt."""
    FILE = 1
    CAMERA = 2


class SourceConfig(NamedTuple):
    kind: SourceKind
    path: Optional[str] = None
    device_index: int = DEFAULT_CAMERA_INDEX

    @property
    def is_live(self) -> bool:
        return self.kind == SourceKind.CAMERA

    @property
    def target(self):
        """Argumen yang diteruskan ke cv.VideoCapture (path atau index)."""
        return self.path if self.kind == SourceKind.FILE else self.device_index

    def describe(self) -> str:
        if self.kind == SourceKind.FILE:
            return f"video file '{self.path}'"
        return f"camera #{self.device_index}"


def file_source(path: str) -> SourceConfig:
    return SourceConfig(kind=SourceKind.FILE, path=path)


def camera_source(device_index: int = DEFAULT_CAMERA_INDEX) -> SourceConfig:
    return SourceConfig(kind=SourceKind.CAMERA, device_index=device_index)
