import json
import logging

import pytest

from priority_order.common.deterministic import stable_sorted
from priority_order.common.errors import ConfigError, DuplicatePriorityError, InputError, NullArgumentError
from priority_order.common.fs import parse_csv, read_text, read_yaml, render_csv
from priority_order.common.ids import generate_run_id
from priority_order.common.logging import JsonLineFormatter, build_logger, log_event


def test_stable_sorted_orders_values():
    assert stable_sorted([{"k": 2}, {"k": 1}], key=lambda item: item["k"]) == [{"k": 1}, {"k": 2}]


def test_stable_sorted_keeps_ties_in_input_order():
    items = [("b", 1), ("a", 0), ("c", 1), ("d", 0)]
    assert stable_sorted(items, key=lambda item: item[1]) == [("a", 0), ("d", 0), ("b", 1), ("c", 1)]


def test_stable_sorted_never_compares_items():
    class Opaque:
        pass

    first, second = Opaque(), Opaque()
    assert stable_sorted([first, second], key=lambda _item: 0) == [first, second]


def test_generate_run_id_prefix():
    assert generate_run_id().startswith("order-")
    assert generate_run_id(prefix="batch").startswith("batch-")


def test_error_messages_name_the_parameter():
    assert "source" in str(NullArgumentError("source"))
    assert "'Test'" in str(DuplicatePriorityError("priorities", ["Test"]))
    assert ConfigError.error_code == "CONFIG_ERROR"


def test_csv_helpers_keep_header_and_values():
    headers, rows = parse_csv("name,category\nBob,B\nAnn,A\n")
    assert headers == ["name", "category"]
    assert rows[1] == {"name": "Ann", "category": "A"}
    assert render_csv(headers, rows) == "name,category\nBob,B\nAnn,A\n"


def test_json_line_formatter_emits_stable_fields():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "ordered %s", (3,), None)
    record.run_id = "run-1"
    record.rows_out = 3

    payload = json.loads(JsonLineFormatter().format(record))

    assert payload["message"] == "ordered 3"
    assert payload["run_id"] == "run-1"
    assert payload["rows_out"] == 3
    assert payload["error_code"] is None
    assert payload["level"] == "INFO"


def test_build_logger_writes_json_lines_to_file(tmp_path):
    log_path = tmp_path / "logs" / "run.log.jsonl"
    logger = build_logger("run-file", log_file=log_path)

    log_event(logger, "hello", event="ORDER_START", status="ok")
    for handler in logger.handlers:
        handler.flush()

    line = log_path.read_text(encoding="utf-8").strip()
    assert json.loads(line)["event"] == "ORDER_START"


def test_parse_csv_rejects_surplus_and_missing_cells():
    with pytest.raises(InputError, match="CSV line 2 "):
        parse_csv("name,category\nBob,B,EXTRA\n")
    with pytest.raises(InputError, match="CSV line 3 "):
        parse_csv("name,category\nBob,B\nAnn\n")
    with pytest.raises(InputError, match="no header"):
        parse_csv("")


def test_read_yaml_wraps_parse_errors(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("profiles: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        read_yaml(path)


def test_read_text_wraps_decode_errors(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"\xff\xfeHIGH\n")
    with pytest.raises(InputError, match="not UTF-8"):
        read_text(str(path))
