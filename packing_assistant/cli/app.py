from __future__ import annotations

import argparse
import os
import sys
import time
import zipfile
from collections import defaultdict
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..excel.reader import (
    SUPPORTED_SUFFIXES,
    MissingColumnsError,
    SheetHeaderError,
    UnsupportedFileError,
    read_order_sheet,
)
from ..logging.init import enable_debug, log_summary, setup_logging
from ..logging.skip_log import SkipLogBuffer
from ..models.config_models import IngestConfig
from ..models.ingest_result import FileStat
from ..models.order_event import OrderEvent
from ..services.detail import render_event_summary
from ..services.header_resolver import resolve_field
from ..services.ingest import ingest_file
from ..services.progress import ProgressTracker
from ..services.stats import compute_stats
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (--config, $PACKING_ASSISTANT_CONFIG, or
  config/ingest.yml when present; built-in defaults otherwise)
- Collect input files (files as given, directories scanned non-recursively)
- Ingest each file's first sheet and log one line per event
- Print a SUMMARY line and exit with 0 (all ok), 2 (some file failed) or 1 (fatal)
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "PACKING_ASSISTANT_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/ingest.yml")


class InputError(Exception):
    pass


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv without overriding variables already set."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="packing-assistant",
        description="Normalize order exports (CSV/XLSX) into dated delivery events",
    )
    p.add_argument("paths", nargs="+", type=Path, help="Order export files or directories")
    p.add_argument("--config", type=Path, default=None, help="YAML config path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, resolved fields & first rows then exit")
    p.add_argument("--skip-log", action="store_true", help="Write skipped rows/date groups to logs/ as JSON Lines")
    p.add_argument("--by-date", action="store_true", help="Group event lines under their delivery date")
    return p.parse_args(argv)


def _resolve_config(explicit: Path | None) -> IngestConfig:
    """Explicit path or env var must exist; the default path is optional."""
    if explicit is not None:
        return load_config(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return IngestConfig.default()


def scan_inputs(paths: list[Path]) -> list[Path]:
    """Expand directories into their supported files (sorted, non-recursive).

    Raises:
        InputError: a given path does not exist
    """
    files: list[Path] = []
    for p in paths:
        if not p.exists():
            raise InputError(f"path not found: {p}")
        if p.is_dir():
            files.extend(
                sorted(f for f in p.iterdir() if f.is_file() and f.suffix.lower() in SUPPORTED_SUFFIXES)
            )
        else:
            files.append(p)
    return files


def _inspect_data(files: list[Path], cfg: IngestConfig) -> int:
    for f in files:
        print(f"FILE: {f.name}")
        try:
            sheet = read_order_sheet(f)
        except (SheetHeaderError, UnsupportedFileError, OSError, ValueError, zipfile.BadZipFile) as e:
            print(f"  read_error: {e}")
            continue
        print(f"  SHEET: {sheet.sheet_name} cols={sheet.columns}")
        if not sheet.rows:
            print("    (no data rows)")
            continue
        first = sheet.rows[0]
        for name in ("order_id", "delivery_date", "items", "notes", "status"):
            value = resolve_field(first, cfg.synonyms.for_field(name))
            print(f"    {name} -> {value!r}")
        safe_rows = []
        for r in sheet.rows[:3]:
            safe_rows.append({k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.items()})
        print("    sample_rows=", safe_rows)
    return EXIT_SUCCESS_ALL


def _log_events(logger, events: list[OrderEvent], cfg: IngestConfig, by_date: bool) -> None:
    def line(event: OrderEvent) -> str:
        return f"{event.title} {render_event_summary(compute_stats(event, cfg.packaging_codes))}"

    if not by_date:
        for event in events:
            logger.info(f"{event.date.isoformat()} {line(event)}")
        return
    grouped: dict[object, list[OrderEvent]] = defaultdict(list)
    for event in events:
        grouped[event.date].append(event)
    for day in sorted(grouped):
        logger.info(f"{day.isoformat()} ({len(grouped[day])} events)")
        for event in grouped[day]:
            logger.info(f"  {line(event)}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    try:
        files = scan_inputs(args.paths)
    except InputError as e:
        logger.error(str(e))
        return EXIT_FATAL
    if not files:
        logger.error("no input files found")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(files, cfg)

    started = time.perf_counter()
    skip_log = SkipLogBuffer() if args.skip_log else None
    stats: list[FileStat] = []
    total_events = 0
    with ProgressTracker(len(files)) as progress:
        for f in files:
            progress.start_file(f)
            file_started = time.perf_counter()
            try:
                result = ingest_file(f, cfg)
            except (
                SheetHeaderError,
                MissingColumnsError,
                UnsupportedFileError,
                OSError,
                ValueError,
                zipfile.BadZipFile,
            ) as e:
                logger.error(f"{f.name}: {e}")
                stats.append(
                    FileStat(
                        file_name=f.name,
                        status="failed",
                        events=0,
                        rows=0,
                        skipped_rows=0,
                        dropped_groups=0,
                        elapsed_seconds=time.perf_counter() - file_started,
                        error=str(e),
                    )
                )
                progress.finish_file(total_events)
                continue

            logger.info(f"{f.name}: rows={result.total_rows} events={len(result.events)}")
            _log_events(logger, result.events, cfg, args.by_date)
            if skip_log is not None:
                skip_log.extend(result.skips)
            total_events += len(result.events)
            stats.append(
                FileStat(
                    file_name=f.name,
                    status="success",
                    events=len(result.events),
                    rows=result.total_rows,
                    skipped_rows=result.skipped_rows,
                    dropped_groups=result.dropped_groups,
                    elapsed_seconds=result.elapsed_seconds,
                )
            )
            progress.finish_file(total_events)

    if skip_log is not None:
        written = skip_log.flush()
        if written is not None:
            logger.info(f"skip log written: {written}")

    summary_line = render_summary_line(len(files), stats, time.perf_counter() - started)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if any(s.status != "success" for s in stats):
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
