from .source_config import SourceKind, SourceConfig, file_source, camera_source
from .frame_source import FrameSource, SourceUnavailableError

__all__ = [
    "SourceKind", "SourceConfig", "file_source", "camera_source",
    "FrameSource", "SourceUnavailableError",
]
