from .acquisition import ProbeAcquirer
from .file_system import collect_media_files
from .media_probe import MediaProbe

__all__ = ["ProbeAcquirer", "collect_media_files", "MediaProbe"]
