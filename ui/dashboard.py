"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from pathlib import Path
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import CLI_LOG_FILE, truncate, write_cli_log

console = Console()


class RequestInfo:
    """Info about a single proxied request."""

    def __init__(self, method: str, target: str, status: int | None, timestamp: datetime):
        self.method = method
        self.target = truncate(target, 60)
        self.status = status
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing the allow-list and recent traffic."""

    def __init__(self, config: Config, log_file: Path = CLI_LOG_FILE):
        self.config = config
        self._log_file = log_file
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 8
        self._counts = {"forwarded": 0, "rejected": 0, "errors": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    @property
    def counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    @property
    def recent(self) -> list[RequestInfo]:
        with self._lock:
            return list(self._recent)

    @property
    def errors(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def log_decision(self, hostname: str | None, *, allowed: bool, reason: str) -> None:
        """Record an allow-list decision."""
        with self._lock:
            if allowed:
                write_cli_log("ALLOW", reason, log_file=self._log_file, host=hostname)
                return
            self._counts["rejected"] += 1
            self._remember(RequestInfo("-", hostname or reason, None, datetime.now()))
            write_cli_log("REJECT", reason, log_file=self._log_file, host=hostname or "-")
            self._refresh()

    def log_forwarded(self, method: str, url: str, status: int) -> None:
        """Record an upstream response."""
        with self._lock:
            self._counts["forwarded"] += 1
            self._remember(RequestInfo(method, url, status, datetime.now()))
            write_cli_log("FORWARD", url, log_file=self._log_file, method=method, status=status)
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._counts["errors"] += 1
            self._errors.insert(0, f"{route} {status}: {truncate(message, 50)}")
            self._errors = self._errors[:3]
            write_cli_log(
                "ERROR", message[:200], log_file=self._log_file, route=route, status=status
            )
            self._refresh()

    def _remember(self, info: RequestInfo) -> None:
        self._recent.insert(0, info)
        self._recent = self._recent[: self._max_recent]

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["body"].split_row(
            Layout(name="domains", ratio=1),
            Layout(name="requests", ratio=2),
        )

        layout["header"].update(self._build_header())
        layout["domains"].update(self._build_domains_panel())
        layout["requests"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Render Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Forwarded: {self._counts['forwarded']}", style="green")
        stats.append("  |  ")
        stats.append(f"Rejected: {self._counts['rejected']}", style="yellow")
        stats.append("  |  ")
        stats.append(f"Errors: {self._counts['errors']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_domains_panel(self) -> Panel:
        """Build the allow-list panel."""
        content = Text()
        for domain in self.config.allowed_domains:
            content.append("• ", style="green")
            content.append(domain + "\n")

        return Panel(content, title="[green]Allowed Domains[/green]", border_style="green")

    def _build_requests_panel(self) -> Panel:
        """Build the recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=6)
            table.add_column("Status", width=6)
            table.add_column("Target", ratio=1)

            for info in self._recent:
                if info.status is None:
                    status = "[yellow]REJ[/yellow]"
                elif 200 <= info.status < 300:
                    status = f"[green]{info.status}[/green]"
                else:
                    status = f"[red]{info.status}[/red]"

                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    status,
                    info.target,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Use http://localhost:{self.config.proxy.port}/proxy?url=YOUR_API_URL",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
