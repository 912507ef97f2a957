import logging
import sys
from datetime import datetime, timezone
from typing import Any, Iterable

# Extras rendered after the event, in this order, when set on a record.
LOG_EXTRA_FIELDS = (
    "tool",
    "operation",
    "login",
    "outcome",
    "endpoint",
    "status",
    "duration_ms",
    "error_type",
)

# Loggers that would otherwise repeat each request already covered by op_call.
NOISY_LOGGERS = ("httpx", "httpcore")


class LogfmtFormatter(logging.Formatter):
    """
    One logfmt line per record:

        ts=2025-01-01T00:00:00.000Z level=info logger=... event=op_call tool=...

    Unset extras are skipped; values with spaces, quotes or `=` are quoted.
    """

    def __init__(self, fields: Iterable[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        kv: list[str] = [
            f"ts={ts.isoformat(timespec='milliseconds').replace('+00:00', 'Z')}",
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        for key in self.fields:
            val = getattr(record, key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info and record.exc_info[0]:
            kv.append(f"exc_type={record.exc_info[0].__name__}")
            kv.append(f"exc={self._fmt_val(record.exc_info[1])}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = str(val)
        if not s or any(c in s for c in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO") -> None:
    """Route all logging to stderr as logfmt; stdout carries the MCP protocol."""
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
