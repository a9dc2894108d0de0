from .probe_record import Container, ProbeRecord, Stream
from .field_row import COLUMNS, FieldRow

__all__ = ["Container", "ProbeRecord", "Stream", "COLUMNS", "FieldRow"]
