"""
Sorting and filtering of FieldRows.

Rows only carry display strings, so the numeric columns are compared by
reverse-parsing what the formatter produced ('12.34 MB' -> bytes,
'01:02:03' -> seconds, ...). Anything that does not parse counts as 0.

Filters fail open: an expression that cannot be understood is reported
once and then ignored, it never removes rows.
"""
import sys
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..errors import FilterSyntaxError
from ..models.field_row import FieldRow, column_index
from .formatting import (
    parse_bitrate,
    parse_duration,
    parse_duration_value,
    parse_fps,
    parse_size,
)

ASCENDING = "asc"
DESCENDING = "desc"
DIRECTIONS = (ASCENDING, DESCENDING)

OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    ">": lambda value, threshold: value > threshold,
    "<": lambda value, threshold: value < threshold,
}

# column -> parser for the row's display string
_ROW_PARSERS: Dict[str, Callable[[str], Optional[float]]] = {
    "size": parse_size,
    "duration": parse_duration,
    "fps": parse_fps,
    "bitrate": parse_bitrate,
}

# column -> parser for the value typed in a filter expression
_VALUE_PARSERS: Dict[str, Callable[[str], Optional[float]]] = {
    "size": parse_size,
    "duration": parse_duration_value,
    "fps": parse_fps,
    "bitrate": parse_bitrate,
}

NUMERIC_COLUMNS = tuple(_ROW_PARSERS)


def numeric_value(column: str, text: str) -> float:
    """Reverse-parse a display string of a numeric column; unparseable -> 0."""
    value = _ROW_PARSERS[column](text)
    return float(value) if value is not None else 0.0


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FilenameFilter:
    """filename:<substring>, case-insensitive."""
    pattern: str

    def matches(self, row: FieldRow) -> bool:
        return self.pattern.lower() in row.filename.lower()


@dataclass(frozen=True)
class ColumnFilter:
    """<column>:<op>:<value> on one of the numeric columns."""
    column: str
    op: str
    threshold: float

    def matches(self, row: FieldRow) -> bool:
        value = numeric_value(self.column, row[column_index(self.column)])
        return OPERATORS[self.op](value, self.threshold)


RowFilter = Union[FilenameFilter, ColumnFilter]


def parse_filter(expression: str) -> RowFilter:
    """
    Parse one --filter expression. Raises FilterSyntaxError.

    The value part is everything after the second ':' so durations can be
    written as 'duration:>:01:30:00'.
    """
    column, sep, rest = expression.partition(":")
    column = column.strip().lower()
    if not sep:
        raise FilterSyntaxError(f"expected column:op:value, got {expression!r}")

    if column == "filename":
        return FilenameFilter(rest)

    parts = rest.split(":", 1)
    if len(parts) != 2:
        raise FilterSyntaxError(f"expected column:op:value, got {expression!r}")
    op, raw_value = parts[0].strip(), parts[1].strip()

    if column not in _VALUE_PARSERS:
        raise FilterSyntaxError(f"cannot filter on column {column!r}")
    if op not in OPERATORS:
        raise FilterSyntaxError(f"unknown operator {op!r} (use > or <)")

    threshold = _VALUE_PARSERS[column](raw_value)
    if threshold is None:
        raise FilterSyntaxError(f"cannot read {raw_value!r} as a {column} value")
    return ColumnFilter(column, op, float(threshold))


def parse_filters(expressions: Iterable[str], warn: bool = True) -> List[RowFilter]:
    """Parse every expression, dropping (and reporting) the ones that do not parse."""
    filters: List[RowFilter] = []
    for expression in expressions:
        try:
            filters.append(parse_filter(expression))
        except FilterSyntaxError as e:
            if warn:
                print(f"⚠️ Ignoring filter {expression!r}: {e}", file=sys.stderr)
    return filters


def should_include_row(row: FieldRow, filters: Sequence[RowFilter]) -> bool:
    """AND across all filters; no filters keeps everything."""
    return all(f.matches(row) for f in filters)


def filter_rows(rows: Iterable[FieldRow], expressions: Iterable[str], warn: bool = True) -> List[FieldRow]:
    filters = parse_filters(expressions, warn=warn)
    return [row for row in rows if should_include_row(row, filters)]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def sort_key(column: str) -> Callable[[FieldRow], Union[float, str]]:
    """Typed key for a column: numbers for size/duration/fps/bitrate, text otherwise."""
    idx = column_index(column)
    name = FieldRow._fields[idx]
    if name in NUMERIC_COLUMNS:
        return lambda row: numeric_value(name, row[idx])
    return lambda row: row[idx]


def sort_rows(rows: Iterable[FieldRow], column: str, direction: str = ASCENDING) -> List[FieldRow]:
    """
    Stable ascending sort on `column`; descending is the exact reverse of it.
    Raises KeyError for an unknown column and ValueError for an unknown direction.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")

    ordered = sorted(rows, key=sort_key(column))
    if direction == DESCENDING:
        ordered.reverse()
    return ordered
