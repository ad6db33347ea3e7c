"""Shared logging utilities.

Only one-line event summaries are written; request and response bodies never
touch the disk.
"""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path = CLI_LOG_FILE,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def clear_logs(log_file: Path = CLI_LOG_FILE) -> None:
    """Remove the CLI log left over from a previous run."""
    log_file.unlink(missing_ok=True)


def truncate(message: str, limit: int) -> str:
    return message[:limit] + "..." if len(message) > limit else message
