from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import pytest

from media_inspector.config import ConfigManager
from media_inspector.database.cache_store import CacheStore
from media_inspector.errors import ProbeError
from media_inspector.models.probe_record import ProbeRecord


def ffprobe_payload(
    filename: str = "sample.mp4",
    size: str = "1500000000",
    duration: str = "3600.000000",
    bit_rate: Optional[str] = "3333333",
    video: bool = True,
    audio: bool = True,
) -> Dict[str, Any]:
    """An ffprobe -show_format -show_streams report for a 1080p H.264 file."""
    streams: List[Dict[str, Any]] = []
    if video:
        streams.append({
            "index": 0,
            "codec_type": "video",
            "codec_name": "h264",
            "profile": "High",
            "width": 1920,
            "height": 1080,
            "r_frame_rate": "24000/1001",
            "avg_frame_rate": "24000/1001",
            "pix_fmt": "yuv420p",
            "bit_rate": "3000000",
        })
    if audio:
        streams.append({
            "index": 1,
            "codec_type": "audio",
            "codec_name": "aac",
            "channels": 2,
            "channel_layout": "stereo",
            "bit_rate": "128000",
        })
    fmt = {"filename": filename, "size": size, "duration": duration, "format_name": "mov,mp4"}
    if bit_rate is not None:
        fmt["bit_rate"] = bit_rate
    return {"streams": streams, "format": fmt}


def make_record(**kwargs) -> ProbeRecord:
    return ProbeRecord.model_validate(ffprobe_payload(**kwargs))


class FakeProber:
    """Stands in for MediaProbe; counts invocations per path."""

    def __init__(self, records: Optional[Dict[str, ProbeRecord]] = None, fail: Optional[set] = None):
        self.records = records or {}
        self.fail = fail or set()
        self.calls: List[str] = []

    def probe(self, filepath: str) -> ProbeRecord:
        self.calls.append(filepath)
        name = os.path.basename(filepath)
        if name in self.fail:
            raise ProbeError("ffprobe exited 1", stderr="Invalid data found when processing input", returncode=1)
        if name in self.records:
            return self.records[name]
        return make_record(filename=filepath, size=str(os.path.getsize(filepath)))


@pytest.fixture
def record() -> ProbeRecord:
    return make_record()


@pytest.fixture
def fake_prober() -> FakeProber:
    return FakeProber()


@pytest.fixture
def cache_file(tmp_path) -> str:
    cache_dir = tmp_path / "config" / "cache"
    cache_dir.mkdir(parents=True)
    return str(cache_dir / "cache.json")


@pytest.fixture
def store(cache_file) -> CacheStore:
    return CacheStore(cache_file)


@pytest.fixture
def media_file(tmp_path) -> str:
    path = tmp_path / "media" / "sample.mp4"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\x00" * 2048)
    return str(path)


@pytest.fixture
def config_manager(tmp_path, monkeypatch) -> ConfigManager:
    for key in list(os.environ):
        if key.startswith("MEDIA_INSPECTOR_"):
            monkeypatch.delenv(key)
    return ConfigManager(config_dir=str(tmp_path / "config"))
