import subprocess
from typing import List, Optional

from pydantic import ValidationError

from ..errors import ProbeError
from ..models.probe_record import ProbeRecord


def build_ffprobe_cmd(filepath: str, ffprobe_bin: str = "ffprobe") -> List[str]:
    return [
        ffprobe_bin,
        "-v", "error",
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        filepath,
    ]


def _run_ffprobe(cmd: List[str], timeout: Optional[float]) -> str:
    """Runs ffprobe and returns its stdout. Raises ProbeError."""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False, timeout=timeout)
    except FileNotFoundError as e:
        raise ProbeError(f"ffprobe not found: {cmd[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise ProbeError(f"ffprobe timed out after {timeout:g}s") from e
    except OSError as e:
        raise ProbeError(f"ffprobe could not be started: {e}") from e

    if result.returncode != 0:
        raise ProbeError(
            f"ffprobe exited {result.returncode}",
            stderr=result.stderr,
            returncode=result.returncode,
        )
    return result.stdout


class MediaProbe:
    """
    Thin wrapper around the ffprobe binary.
    One blocking subprocess per call; a timeout of None waits forever.
    """
    def __init__(self, ffprobe_bin: str = "ffprobe", timeout: Optional[float] = None):
        self.ffprobe_bin = ffprobe_bin
        self.timeout = timeout

    def probe(self, filepath: str) -> ProbeRecord:
        """Probe one file. Raises ProbeError on tool failure or unusable output."""
        raw = _run_ffprobe(build_ffprobe_cmd(filepath, self.ffprobe_bin), self.timeout)
        try:
            return ProbeRecord.from_ffprobe_json(raw)
        except ValidationError as e:
            raise ProbeError(f"ffprobe output could not be parsed ({e.error_count()} error(s))") from e
