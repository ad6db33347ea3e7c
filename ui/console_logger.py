"""Line-per-event logger for headless runs."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ui.log_utils import CLI_LOG_FILE, truncate, write_cli_log


class ConsoleLogger:
    """Print each proxy event as a single line."""

    def __init__(self, console: Console | None = None, log_file: Path = CLI_LOG_FILE):
        self._console = console or Console()
        self._log_file = log_file

    def log_decision(self, hostname: str | None, *, allowed: bool, reason: str) -> None:
        if allowed:
            self._console.print(f"[green]ALLOW[/green] {escape(hostname or '-')}")
            write_cli_log("ALLOW", reason, log_file=self._log_file, host=hostname)
        else:
            self._console.print(
                f"[yellow]REJECT[/yellow] {escape(hostname or '-')}: {escape(reason)}"
            )
            write_cli_log("REJECT", reason, log_file=self._log_file, host=hostname or "-")

    def log_forwarded(self, method: str, url: str, status: int) -> None:
        style = "green" if 200 <= status < 300 else "red"
        self._console.print(f"[{style}]{status}[/{style}] {method} {escape(url)}")
        write_cli_log("FORWARD", url, log_file=self._log_file, method=method, status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        self._console.print(
            f"[red][ERROR][/red] {route} {status}: {escape(truncate(message, 200))}"
        )
        write_cli_log(
            "ERROR", message[:200], log_file=self._log_file, route=route, status=status
        )
