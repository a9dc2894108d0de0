from typing import Dict, NamedTuple, Tuple


class FieldRow(NamedTuple):
    """
    Display-ready projection of a ProbeRecord.
    Built once per file and never mutated; the query engine sorts and
    filters these by position or by name.
    """
    filename: str
    size: str
    duration: str
    fps: str
    bitrate: str
    resolution: str
    codec: str
    profile: str
    depth: str
    audio: str


COLUMNS: Tuple[str, ...] = FieldRow._fields

HEADERS: Tuple[str, ...] = (
    "Filename", "Size", "Duration", "FPS", "Bitrate",
    "Resolution", "Format", "Profile", "Depth", "Audio",
)

# Names accepted on the command line in addition to COLUMNS
COLUMN_ALIASES: Dict[str, str] = {
    "format": "codec",
    "bit-depth": "depth",
    "bit_depth": "depth",
    "audio-summary": "audio",
}


def column_index(name: str) -> int:
    """Position of a column by name or alias. Raises KeyError for unknown names."""
    key = name.strip().lower()
    key = COLUMN_ALIASES.get(key, key)
    if key not in COLUMNS:
        raise KeyError(name)
    return COLUMNS.index(key)
