"""CLI entrypoint for ordering lines or CSV rows by a priority list."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from priority_order.common.config_loader import Profile, load_profiles, resolve_profile
from priority_order.common.constants import (
    DEFAULT_CONFIG_PATH,
    EXIT_HARD_FAIL,
    EXIT_SUCCESS,
    INPUT_FORMATS,
    STDIO_PATH,
)
from priority_order.common.errors import ConfigError, PriorityOrderError
from priority_order.common.fs import parse_csv, read_text, render_csv, write_text
from priority_order.common.ids import generate_run_id
from priority_order.common.logging import build_logger, log_event, log_failure
from priority_order.common.time_utils import elapsed_ms
from priority_order.ordering import order_by_priority


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="priority-order", description=__doc__)
    parser.add_argument("input", help=f"input file, or {STDIO_PATH} for stdin")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--priority", action="append", dest="priorities", metavar="KEY")
    source.add_argument("--profile", default=None)
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--overlay-config", default=None)
    parser.add_argument("--format", default="lines", choices=INPUT_FORMATS)
    parser.add_argument("--key-column", default=None)
    parser.add_argument("--ignore-case", action="store_true")
    parser.add_argument("--output", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> Profile:
    """Merge command-line flags with the selected profile, if any."""
    if args.profile is None:
        profile = Profile(name="cli", priorities=tuple(args.priorities))
    else:
        overlay = Path(args.overlay_config) if args.overlay_config else None
        profiles = load_profiles(Path(args.config), overlay_path=overlay)
        profile = resolve_profile(profiles, args.profile)
    return Profile(
        name=profile.name,
        priorities=profile.priorities,
        ignore_case=args.ignore_case or profile.ignore_case,
        key_column=args.key_column or profile.key_column,
    )


def _key_normaliser(ignore_case: bool):
    if ignore_case:
        return lambda value: value.strip().casefold()
    return lambda value: value.strip()


def order_lines(text: str, settings: Profile) -> tuple[str, int, int]:
    """Order non-blank lines; returns the rendered text, lines read and lines written."""
    normalise = _key_normaliser(settings.ignore_case)
    raw_lines = text.splitlines()
    lines = [line for line in raw_lines if line.strip()]
    ordered = order_by_priority(lines, normalise, [normalise(p) for p in settings.priorities])
    rendered = "".join(f"{line}\n" for line in ordered)
    return rendered, len(raw_lines), len(ordered)


def order_csv(text: str, settings: Profile) -> tuple[str, int, int]:
    if not settings.key_column:
        raise ConfigError("CSV input needs --key-column or a profile key_column")
    headers, rows = parse_csv(text)
    if settings.key_column not in headers:
        raise ConfigError(f"Key column {settings.key_column!r} not in CSV header: {', '.join(headers)}")

    normalise = _key_normaliser(settings.ignore_case)
    column = settings.key_column
    ordered = order_by_priority(
        rows,
        lambda row: normalise(row[column] or ""),
        [normalise(p) for p in settings.priorities],
    )
    return render_csv(headers, ordered), len(rows), len(ordered)


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    log_file = Path(args.log_file) if args.log_file else None
    logger = build_logger(run_id, level=args.log_level, log_file=log_file)
    started = time.monotonic()

    log_event(logger, "order start", run_id=run_id, event="ORDER_START", status="ok", profile=args.profile)
    try:
        settings = resolve_settings(args)
        text = read_text(args.input)
        if args.format == "csv":
            rendered, rows_in, rows_out = order_csv(text, settings)
        else:
            rendered, rows_in, rows_out = order_lines(text, settings)
        write_text(args.output, rendered)
    except PriorityOrderError as exc:
        _log_failure(logger, run_id, args, started, str(exc), exc.error_code)
        return EXIT_HARD_FAIL
    except OSError as exc:
        _log_failure(logger, run_id, args, started, str(exc), "IO_ERROR")
        return EXIT_HARD_FAIL
    except Exception as exc:
        _log_failure(logger, run_id, args, started, f"unexpected failure: {exc!r}", "UNEXPECTED_ERROR")
        return EXIT_HARD_FAIL

    log_event(
        logger,
        f"ordered {rows_out} items by {len(settings.priorities)} priorities",
        run_id=run_id,
        event="ORDER_END",
        status="ok",
        profile=args.profile,
        rows_in=rows_in,
        rows_out=rows_out,
        duration_ms=elapsed_ms(started),
    )
    return EXIT_SUCCESS


def _log_failure(
    logger: logging.Logger,
    run_id: str,
    args: argparse.Namespace,
    started: float,
    message: str,
    error_code: str,
) -> None:
    log_failure(
        logger,
        message,
        run_id=run_id,
        event="ORDER_FAIL",
        status="error",
        profile=args.profile,
        duration_ms=elapsed_ms(started),
        error_code=error_code,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
