"""Application constants."""

DEFAULT_CONFIG_PATH = "config/profiles.yml"
INPUT_FORMATS = ("lines", "csv")
STDIO_PATH = "-"
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "level",
    "run_id",
    "event",
    "status",
    "profile",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
