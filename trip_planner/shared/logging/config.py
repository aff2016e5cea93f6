"""
Structured logging for planning runs.

Planner log lines start with a bracketed context prefix
(``[run=..] [graph=trip_planner] [node=..] ``). The JSON formatter lifts
those tags into their own fields so log pipelines can filter by run or
node without parsing the message.
"""

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


CONTEXT_TAG = re.compile(r"\[(\w+)=([^\]]*)\]\s*")


def split_context(message: str):
    """Split ``"[run=1] [node=x] text"`` into ({"run": "1", "node": "x"}, "text")."""
    context: Dict[str, str] = {}
    position = 0
    while True:
        match = CONTEXT_TAG.match(message, position)
        if not match:
            break
        context[match.group(1)] = match.group(2)
        position = match.end()
    return context, message[position:]


class StructuredFormatter(logging.Formatter):
    """
    Formats records as one JSON object per line.

    Fields: timestamp (UTC), level, logger, message, the context tags found
    in the message prefix, ``extra`` when attached, and ``exception``.
    """

    def format(self, record: logging.LogRecord) -> str:
        context, message = split_context(record.getMessage())
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
        }
        entry.update(context)

        if hasattr(record, "extra"):
            entry["extra"] = record.extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = "trip_planner",
) -> logging.Logger:
    """
    Send the service's logs through the JSON formatter.

    Args:
        level: Logging level (default: INFO)
        log_file: Also write to this file when given
        logger_name: Logger to configure; its children inherit the handlers

    Returns:
        The configured logger.
    """
    formatter = StructuredFormatter()
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers = []
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def summarize_state(state: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the counters worth logging from a planning state."""
    start_time = state.get("start_time")
    end_time = state.get("end_time")
    elapsed_ms = None
    if start_time and end_time:
        elapsed_ms = round((end_time - start_time).total_seconds() * 1000, 2)

    return {
        "run_id": state.get("run_id"),
        "destination": state.get("destination"),
        "days_count": state.get("days_count"),
        "transportation_mode": state.get("transportation_mode"),
        "pois": len(state.get("points_of_interest") or []),
        "itinerary_days": len(state.get("daily_itinerary") or []),
        "listings": len(state.get("airbnb_recommendations") or []),
        "errors": len(state.get("errors") or []),
        "elapsed_ms": elapsed_ms,
    }


def log_state_transition(
    event: str,
    state: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a planning run event with a summary of the state.

    Args:
        event: Event name ("planning_start", "planning_complete")
        state: Planning state; only counters are logged, never payloads
        extra: Additional context for the record
        logger: Logger to use; defaults to the package logger
    """
    logger = logger or logging.getLogger("trip_planner")
    payload: Dict[str, Any] = {"event": event, "state_summary": summarize_state(state)}
    if extra:
        payload["extra"] = extra

    run_id = state.get("run_id", "unknown")
    logger.info(
        f"[run={run_id}] [graph=trip_planner] State transition: {event}",
        extra={"extra": payload},
    )
