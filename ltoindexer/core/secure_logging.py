"""
Logging helpers for the LTO Chain Indexer.

Values taken from the chain (addresses, data entries, anchor values) are
attacker-controlled, so they are sanitized before being written to the log.
"""

import json
import logging
from typing import Any


LOG_INJECTION_CHARS = {
    "\n": "\\n",
    "\r": "\\r",
    "\x00": "\\x00",
    "\x1b": "\\x1b",  # ANSI escape
    "\t": "\\t",
}

MAX_LOG_VALUE_LENGTH = 200


def sanitize_for_log(value: Any) -> str:
    """
    Sanitize a value before logging to prevent log injection.
    
    Args:
        value: Value to sanitize (string, dict, list, or other)
        
    Returns:
        Safe string representation
    """
    if value is None:
        return "null"

    if isinstance(value, (int, float, bool)):
        return str(value)

    if isinstance(value, str):
        result = value
        for char, replacement in LOG_INJECTION_CHARS.items():
            result = result.replace(char, replacement)
        if len(result) > MAX_LOG_VALUE_LENGTH:
            result = result[:MAX_LOG_VALUE_LENGTH] + "...[truncated]"
        return result

    if isinstance(value, dict):
        return json.dumps(
            {k: sanitize_for_log(v) for k, v in value.items()},
            ensure_ascii=True
        )

    if isinstance(value, (list, tuple, set)):
        return json.dumps([sanitize_for_log(item) for item in value])

    return sanitize_for_log(str(value))


def setup_logging(level: str = "INFO", fmt: str = None) -> None:
    """
    Configure the root logger once for the process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        fmt: Log record format
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
