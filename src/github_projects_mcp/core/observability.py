from __future__ import annotations

import logging
from typing import Any, Dict

# Attributes every LogRecord already carries; `extra` may not overwrite them.
RESERVED_LOG_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

OBSERVABILITY_LOGGER = "github_projects_mcp.observability"


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Emit a structured event (e.g. "op_call") whose fields travel as record
    extras for LogfmtFormatter. Fields named like LogRecord attributes are
    dropped.
    """
    log = logger or logging.getLogger(OBSERVABILITY_LOGGER)
    extra = {"event": event, **_clean_fields(fields)}
    log.log(level, event, extra=extra)


__all__ = ["log_event", "OBSERVABILITY_LOGGER", "RESERVED_LOG_KEYS"]
