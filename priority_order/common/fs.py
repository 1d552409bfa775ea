"""Filesystem and stdio helpers."""

from __future__ import annotations

import csv
import io
import sys
from pathlib import Path
from typing import Iterable

import yaml

from priority_order.common.constants import STDIO_PATH
from priority_order.common.errors import ConfigError, InputError


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_yaml(path: Path):
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config file is not UTF-8: {path}") from exc


def read_text(path: str) -> str:
    try:
        if path == STDIO_PATH:
            return sys.stdin.read()
        with Path(path).open("r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise InputError(f"Input is not UTF-8: {path} (byte {exc.start})") from exc


def write_text(path: str | None, text: str) -> None:
    if path is None or path == STDIO_PATH:
        sys.stdout.write(text)
        return
    out_path = Path(path)
    ensure_dir(out_path.parent)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)


def parse_csv(text: str) -> tuple[list[str], list[dict[str, str]]]:
    reader = csv.DictReader(io.StringIO(text, newline=""))
    try:
        if reader.fieldnames is None:
            raise InputError("CSV input has no header row")
        rows = []
        for row in reader:
            # DictReader files surplus cells under None and pads short rows with None.
            if None in row or None in row.values():
                raise InputError(
                    f"CSV line {reader.line_num} has a different number of fields "
                    f"than the header ({len(reader.fieldnames)})"
                )
            rows.append(row)
    except csv.Error as exc:
        raise InputError(f"Malformed CSV near line {reader.line_num}: {exc}") from exc
    return list(reader.fieldnames), rows


def render_csv(headers: list[str], rows: Iterable[dict[str, str]]) -> str:
    buffer = io.StringIO(newline="")
    writer = csv.DictWriter(buffer, fieldnames=headers, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()
