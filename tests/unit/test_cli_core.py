import pytest

from priority_order.cli import order_csv, order_lines, parse_args, resolve_settings
from priority_order.common.config_loader import Profile
from priority_order.common.errors import ConfigError, DuplicatePriorityError, InputError


def test_parse_args_defaults():
    args = parse_args(["in.txt", "--priority", "HIGH", "--priority", "LOW"])
    assert args.input == "in.txt"
    assert args.priorities == ["HIGH", "LOW"]
    assert args.profile is None
    assert args.format == "lines"
    assert args.config == "config/profiles.yml"
    assert args.ignore_case is False


def test_parse_args_requires_exactly_one_priority_source():
    with pytest.raises(SystemExit):
        parse_args(["in.txt"])
    with pytest.raises(SystemExit):
        parse_args(["in.txt", "--priority", "A", "--profile", "severity"])


def test_resolve_settings_from_cli_flags():
    settings = resolve_settings(parse_args(["-", "--priority", "b", "--priority", "a", "--ignore-case"]))
    assert settings.priorities == ("b", "a")
    assert settings.ignore_case is True
    assert settings.key_column is None


def test_resolve_settings_from_profile_with_override():
    args = parse_args(["-", "--profile", "driver_category", "--key-column", "cat"])
    settings = resolve_settings(args)
    assert settings.name == "driver_category"
    assert settings.priorities[0] == "First category"
    assert settings.key_column == "cat"


def test_order_lines_skips_blank_lines_and_keeps_unlisted_order():
    text = "SUPER LOW\nLOW\n\nHIGH\nSUPER SUPER LOW\nMEDIUM\n"
    rendered, rows_in, rows_out = order_lines(text, Profile(name="t", priorities=("HIGH", "MEDIUM", "LOW")))
    assert rows_in == 6
    assert rows_out == 5
    assert rendered == "HIGH\nMEDIUM\nLOW\nSUPER LOW\nSUPER SUPER LOW\n"


def test_order_lines_ignore_case():
    rendered, _, _ = order_lines("info\nERROR\nDebug\n", Profile(name="t", priorities=("Error", "INFO"), ignore_case=True))
    assert rendered == "ERROR\ninfo\nDebug\n"


def test_order_lines_duplicate_priorities_after_folding():
    with pytest.raises(DuplicatePriorityError):
        order_lines("a\n", Profile(name="t", priorities=("A", "a"), ignore_case=True))


def test_order_csv_by_column():
    text = "name,category\nBob,Second\nWillow,None\nHuxley,First\nMax,Second\n"
    rendered, rows_in, rows_out = order_csv(text, Profile(name="t", priorities=("First", "Second"), key_column="category"))
    assert rows_in == rows_out == 4
    assert rendered == "name,category\nHuxley,First\nBob,Second\nMax,Second\nWillow,None\n"


def test_order_csv_requires_known_key_column():
    with pytest.raises(ConfigError):
        order_csv("a,b\n1,2\n", Profile(name="t", priorities=("1",)))
    with pytest.raises(ConfigError, match="not in CSV header"):
        order_csv("a,b\n1,2\n", Profile(name="t", priorities=("1",), key_column="c"))


@pytest.mark.parametrize(
    ("text", "line"),
    [
        ("name,category\nBob,Second,EXTRA\nAnn,First\n", 2),
        ("name,category\nBob,Second\nAnn\n", 3),
    ],
)
def test_order_csv_rejects_ragged_rows(text, line):
    with pytest.raises(InputError, match=f"CSV line {line} "):
        order_csv(text, Profile(name="t", priorities=("First",), key_column="category"))
