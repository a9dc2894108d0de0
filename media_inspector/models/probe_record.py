from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class Stream(BaseModel):
    """
    One stream from an ffprobe report.
    Only the attributes the inspector reads are modelled; the rest of the
    ffprobe payload is dropped on validation.
    """
    codec_type: str = Field(..., description="video, audio, subtitle, data ...")
    codec_name: Optional[str] = None
    profile: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    frame_rate_ratio: Optional[str] = Field(None, alias="r_frame_rate", description="Rational 'num/den'")
    bit_rate: Optional[str] = Field(None, description="Decimal string, bits/sec")
    pixel_format: Optional[str] = Field(None, alias="pix_fmt")
    channel_count: Optional[int] = Field(None, alias="channels")

    class Config:
        populate_by_name = True
        extra = "ignore"


class Container(BaseModel):
    """Container-level ('format') section of an ffprobe report."""
    filename: str = ""
    size: str = Field(..., description="Decimal string, bytes")
    duration: str = Field(..., description="Decimal string, seconds")
    bit_rate: Optional[str] = Field(None, description="Overall bitrate, bits/sec")

    class Config:
        populate_by_name = True
        extra = "ignore"


class ProbeRecord(BaseModel):
    """
    Technical metadata of a single media file.
    Field aliases follow ffprobe's JSON keys so a report validates as-is
    and the cache file keeps the same shape.
    """
    streams: List[Stream]
    container: Container = Field(..., alias="format")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @classmethod
    def from_ffprobe_json(cls, raw: str) -> "ProbeRecord":
        """Validate `ffprobe -print_format json` output. Raises pydantic.ValidationError."""
        return cls.model_validate_json(raw)

    def first_stream(self, codec_type: str) -> Optional[Stream]:
        # Only the first stream of each type is ever consulted.
        for stream in self.streams:
            if stream.codec_type == codec_type:
                return stream
        return None

    @property
    def video_stream(self) -> Optional[Stream]:
        return self.first_stream("video")

    @property
    def audio_stream(self) -> Optional[Stream]:
        return self.first_stream("audio")

    def to_cache_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
