import argparse
import sys
import time
from typing import List, Optional, Tuple

from pydantic import ValidationError

from media_inspector.config import ConfigManager, get_config
from media_inspector.core.field_extractor import extract
from media_inspector.core.query import DIRECTIONS, filter_rows, sort_rows
from media_inspector.database.cache_store import CacheStore
from media_inspector.errors import ProbeError
from media_inspector.models.field_row import COLUMN_ALIASES, COLUMNS, FieldRow, column_index
from media_inspector.models.probe_record import ProbeRecord
from media_inspector.scanner.acquisition import Prober, ProbeAcquirer
from media_inspector.scanner.file_system import collect_media_files, format_elapsed
from media_inspector.scanner.media_probe import MediaProbe
from media_inspector.templates.table_template import render_table

EXIT_OK = 0
EXIT_SETUP = 2


def build_parser(cfg: ConfigManager) -> argparse.ArgumentParser:
    settings = cfg.settings
    sort_choices = list(COLUMNS) + list(COLUMN_ALIASES)

    parser = argparse.ArgumentParser(
        prog="media-inspector",
        description="Inspect media files with ffprobe and print a sortable, filterable table.",
    )
    parser.add_argument("paths", nargs="*", help="Media files or directories to analyze")
    parser.add_argument("-s", "--sort", default=settings.default_sort, choices=sort_choices,
                        help=f"Sort by column (default: {settings.default_sort})")
    parser.add_argument("-d", "--direction", default=settings.default_direction, choices=DIRECTIONS,
                        help=f"Sort direction (default: {settings.default_direction})")
    parser.add_argument("-f", "--filter", action="append", default=[],
                        help="column:op:value, e.g. 'bitrate:>:5' or 'duration:>:1h30m'; "
                             "'filename:<text>' matches names. Repeatable, all must match.")
    parser.add_argument("-l", "--filename-length", type=int, default=settings.filename_length,
                        help=f"Maximum filename width (default: {settings.filename_length})")
    parser.add_argument("--cached", action="store_true", help="Show only cached entries, skip scanning")
    return parser


def probe_files(files: List[str], acquirer: ProbeAcquirer) -> List[Tuple[str, ProbeRecord]]:
    """Acquire metadata file by file. Per-file failures are reported and skipped."""
    start = time.monotonic()
    results: List[Tuple[str, ProbeRecord]] = []

    for processed, path in enumerate(files, start=1):
        try:
            results.append((path, acquirer.acquire(path)))
        except (OSError, ProbeError) as e:
            print(f"\n❌ Error processing {path}: {e}", file=sys.stderr)

        sys.stderr.write(
            f"\x1b[2K\rProcessing: {processed}/{len(files)} files ({acquirer.hits} from cache) "
            f"({format_elapsed(time.monotonic() - start)})"
        )
        sys.stderr.flush()

    sys.stderr.write("\n")
    return results


def build_rows(records: List[Tuple[str, ProbeRecord]], filename_length: int) -> List[FieldRow]:
    return [extract(path, record, filename_length) for path, record in records]


def run_inspector(
    args_list: Optional[List[str]] = None,
    cfg: Optional[ConfigManager] = None,
    prober: Optional[Prober] = None,
) -> int:
    try:
        cfg = cfg or get_config()
    except ValidationError as e:
        print(f"❌ Invalid settings: {e}", file=sys.stderr)
        return EXIT_SETUP

    parser = build_parser(cfg)
    args = parser.parse_args(args_list)
    if not args.paths and not args.cached:
        parser.error("at least one path is required unless --cached is given")
    # Defaults come from settings and bypass argparse choices
    try:
        column_index(args.sort)
    except KeyError:
        parser.error(f"unknown sort column {args.sort!r}")
    if args.direction not in DIRECTIONS:
        parser.error(f"unknown sort direction {args.direction!r}")

    try:
        cfg.ensure_directories()
    except OSError as e:
        print(f"❌ Cannot create cache directory {cfg.cache_dir}: {e}", file=sys.stderr)
        return EXIT_SETUP

    store = CacheStore(cfg.cache_file)

    if args.cached:
        try:
            records = store.entries()
        except OSError as e:
            print(f"❌ Cannot read cache {cfg.cache_file}: {e}", file=sys.stderr)
            return EXIT_SETUP
        if not records:
            print("⚠️ No cached entries found!", file=sys.stderr)
            return EXIT_OK
        print(f"ℹ️ Loaded {len(records)} entries from cache", file=sys.stderr)
    else:
        media_files = collect_media_files(args.paths)
        if not media_files:
            print("⚠️ No media files found!", file=sys.stderr)
            return EXIT_OK

        if prober is None:
            prober = MediaProbe(cfg.settings.ffprobe_bin, timeout=cfg.probe_timeout)
        records = probe_files(media_files, ProbeAcquirer(store, prober))

    rows = build_rows(records, args.filename_length)
    rows = filter_rows(rows, args.filter)
    rows = sort_rows(rows, args.sort, args.direction)

    print(render_table(rows, color=cfg.settings.color and sys.stdout.isatty()))
    return EXIT_OK


def main() -> None:
    sys.exit(run_inspector())


if __name__ == "__main__":
    main()
