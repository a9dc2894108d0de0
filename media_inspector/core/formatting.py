"""
Display formatting for probe values and the reverse parsers the query
engine uses to turn those display strings back into numbers.

Formatters never raise: unparseable input yields an empty string.
Parsers return None for anything they do not understand.
"""
import math
import re
from typing import Callable, Optional, Sequence

KB = 1024
MB = KB * 1024
GB = MB * 1024

SIZE_UNITS = {"B": 1, "KB": KB, "MB": MB, "GB": GB}
ELLIPSIS = "..."


def _to_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_size(size: Optional[str]) -> str:
    """Byte count -> '1.50 GB' / '12.00 MB' / '3.25 KB' / '512 B'."""
    try:
        n = int(size)
    except (TypeError, ValueError):
        return ""
    if n < 0:
        return ""

    if n >= GB:
        return f"{n / GB:.2f} GB"
    if n >= MB:
        return f"{n / MB:.2f} MB"
    if n >= KB:
        return f"{n / KB:.2f} KB"
    return f"{n} B"


def format_duration(duration: Optional[str]) -> str:
    """Seconds -> 'HH:MM:SS' from one hour up, 'MM:SS' below."""
    secs = _to_float(duration)
    if secs is None or secs < 0:
        return ""

    hours = int(secs // 3600)
    minutes = int((secs % 3600) // 60)
    seconds = int(secs % 60)
    if hours > 0:
        return f"{hours:02}:{minutes:02}:{seconds:02}"
    return f"{minutes:02}:{seconds:02}"


def format_fps(ratio: Optional[str]) -> str:
    """ffprobe rational frame rate ('24000/1001') -> '23.98'."""
    if not ratio:
        return ""
    parts = ratio.split("/")
    if len(parts) != 2:
        return ""
    num = _to_float(parts[0])
    den = _to_float(parts[1])
    if num is None or den is None or den == 0:
        return ""
    return f"{num / den:.2f}"


def format_bitrate(bit_rate: Optional[str]) -> str:
    """Bits/sec -> '7.20 Mbps'."""
    bps = _to_float(bit_rate)
    if bps is None:
        return ""
    return f"{bps / 1_000_000:.2f} Mbps"


def format_resolution(width: Optional[int], height: Optional[int]) -> str:
    return f"{width or 0}x{height or 0}"


def bit_depth(pixel_format: Optional[str]) -> str:
    # Heuristic: anything not tagged p10/p12 is reported as 8bit.
    if pixel_format and "p10" in pixel_format:
        return "10bit"
    if pixel_format and "p12" in pixel_format:
        return "12bit"
    return "8bit"


def format_audio(channels: Optional[int], bit_rate: Optional[str]) -> str:
    """'2CH 128k', or just '6CH' when the stream carries no bitrate."""
    summary = f"{channels or 0}CH"
    bps = _to_float(bit_rate)
    if bps is not None:
        summary += f" {bps / 1000:.0f}k"
    return summary


def truncate_middle(text: str, max_len: Optional[int]) -> str:
    """
    Collapse the middle of `text` into '...' so the result is `max_len` long.
    Prefix and suffix share the remaining width; an odd leftover goes to the prefix.
    A missing or non-positive `max_len` disables truncation.
    """
    if not max_len or max_len <= 0 or len(text) <= max_len:
        return text
    if max_len <= len(ELLIPSIS):
        return text[:max_len]

    room = max_len - len(ELLIPSIS)
    tail = room // 2
    head = room - tail
    return text[:head] + ELLIPSIS + (text[-tail:] if tail else "")


# ---------------------------------------------------------------------------
# Reverse parsers
# ---------------------------------------------------------------------------

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMG]?B)?\s*$", re.IGNORECASE)
_HUMAN_DURATION_TOKEN = re.compile(r"(\d+(?:\.\d+)?)(h|min|m|s)?")
_DURATION_UNITS = {"h": 3600.0, "min": 60.0, "m": 60.0, "s": 1.0, None: 1.0}


def parse_size(text: Optional[str]) -> Optional[int]:
    """'1.50 GB' -> bytes. A bare number is taken as bytes."""
    m = _SIZE_RE.match(text or "")
    if not m:
        return None
    unit = (m.group(2) or "B").upper()
    return int(float(m.group(1)) * SIZE_UNITS[unit])


def parse_duration(text: Optional[str]) -> Optional[float]:
    """'MM:SS' or 'HH:MM:SS' -> seconds."""
    parts = (text or "").strip().split(":")
    if len(parts) not in (2, 3):
        return None

    seconds = 0.0
    for part in parts:
        value = _to_float(part)
        if value is None:
            return None
        seconds = seconds * 60 + value
    return seconds


def parse_human_duration(text: Optional[str]) -> Optional[float]:
    """
    Shorthand like '1h30m', '90min', '1h 5m 10s' -> seconds (components summed).
    A number without a unit counts as seconds.
    """
    compact = re.sub(r"\s+", "", (text or "").lower())
    if not compact:
        return None

    total = 0.0
    pos = 0
    for m in _HUMAN_DURATION_TOKEN.finditer(compact):
        if m.start() != pos:
            return None
        total += float(m.group(1)) * _DURATION_UNITS[m.group(2)]
        pos = m.end()
    if pos != len(compact):
        return None
    return total


def parse_duration_value(text: Optional[str]) -> Optional[float]:
    """Duration as typed by a user: shorthand first, then 'HH:MM:SS', then plain seconds."""
    parsers: Sequence[Callable[[Optional[str]], Optional[float]]] = (
        parse_human_duration,
        parse_duration,
        _to_float,
    )
    for parser in parsers:
        value = parser(text)
        if value is not None:
            return value
    return None


def parse_fps(text: Optional[str]) -> Optional[float]:
    return _to_float(text) if text else None


def parse_bitrate(text: Optional[str]) -> Optional[float]:
    """'7.20 Mbps' -> 7.2 (leading numeric token, Mbps)."""
    tokens = (text or "").split()
    if not tokens:
        return None
    return _to_float(tokens[0])
