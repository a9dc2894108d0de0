# Media Inspector Core Package

from .identity import identity_of, signature_of
from .field_extractor import extract
from .query import filter_rows, parse_filter, should_include_row, sort_rows
