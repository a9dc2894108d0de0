import os
from typing import Optional

from ..models.field_row import FieldRow
from ..models.probe_record import ProbeRecord
from .formatting import (
    bit_depth,
    format_audio,
    format_bitrate,
    format_duration,
    format_fps,
    format_resolution,
    format_size,
    truncate_middle,
)


def display_name(path: str) -> str:
    """Base name of `path`, with undecodable bytes shown as U+FFFD."""
    name = os.path.basename(os.path.normpath(path)) or "Unknown"
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def extract(path: str, record: ProbeRecord, filename_length: Optional[int] = None) -> FieldRow:
    """
    Builds the ten display fields for one file. Pure: no filesystem access.

    Audio-only files keep size and duration but leave the six video columns
    empty; files without audio leave the audio column empty.
    """
    name = display_name(path)
    fmt = record.container

    video = record.video_stream
    if video is not None:
        # Container bitrate is more reliable than the per-stream figure
        video_fields = (
            format_fps(video.frame_rate_ratio),
            format_bitrate(fmt.bit_rate),
            format_resolution(video.width, video.height),
            video.codec_name or "",
            video.profile or "",
            bit_depth(video.pixel_format),
        )
    else:
        video_fields = ("",) * 6

    audio = record.audio_stream
    audio_summary = format_audio(audio.channel_count, audio.bit_rate) if audio is not None else ""

    return FieldRow(
        truncate_middle(name, filename_length),
        format_size(fmt.size),
        format_duration(fmt.duration),
        *video_fields,
        audio_summary,
    )
