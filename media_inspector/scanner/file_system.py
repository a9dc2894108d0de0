import os
import sys
import time
from typing import Iterable, List, Optional, TextIO

from ..config import MEDIA_EXTENSIONS


def format_elapsed(secs: float) -> str:
    """'42s' under a minute, 'M:SS' above."""
    if secs >= 60:
        minutes = int(secs // 60)
        seconds = int(secs % 60)
        return f"{minutes}:{seconds:02}"
    return f"{round(secs)}s"


def is_media_file(filename: str) -> bool:
    return os.path.splitext(filename)[1].lower() in MEDIA_EXTENSIONS


class MediaDiscovery:
    """
    Expands the command-line paths into a list of media files.
    Files are taken as given (if their extension is known); directories
    are walked recursively in sorted order.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stderr
        self.scanned = 0
        self.found = 0
        self._start = 0.0

    def _progress(self) -> None:
        elapsed = format_elapsed(time.monotonic() - self._start)
        self.stream.write(
            f"\x1b[2K\rScanning: {self.scanned} scanned, {self.found} media files found ({elapsed})"
        )
        self.stream.flush()

    def _consider(self, path: str, found_files: List[str]) -> None:
        self.scanned += 1
        if is_media_file(path):
            self.found += 1
            found_files.append(path)
            self._progress()

    def collect(self, targets: Iterable[str]) -> List[str]:
        self._start = time.monotonic()
        self.scanned = 0
        self.found = 0
        found_files: List[str] = []
        self._progress()

        for target in targets:
            if os.path.isfile(target):
                self._consider(target, found_files)
            elif os.path.isdir(target):
                for root, dirs, files in os.walk(target):
                    dirs.sort()
                    for name in sorted(files):
                        full_path = os.path.join(root, name)
                        if os.path.isfile(full_path):
                            self._consider(full_path, found_files)
            else:
                self.stream.write(f"\n⚠️ Warning: Path not found: {target}\n")

        self.stream.write(f"\nScanning completed in {format_elapsed(time.monotonic() - self._start)}\n")
        return found_files


def collect_media_files(targets: Iterable[str], stream: Optional[TextIO] = None) -> List[str]:
    return MediaDiscovery(stream).collect(targets)
