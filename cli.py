"""CLI entry point for render-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import Config, load_config
from core.exceptions import ConfigurationError
from core.protocols import RequestLogger
from ui.console_logger import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    plain = not console.is_terminal

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--domains":
            for domain in config.allowed_domains:
                console.print(domain)
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--plain":
            plain = True
        else:
            console.print(f"[red][ERROR][/red] Unknown option: {arg}")
            _print_help()
            sys.exit(1)

    clear_logs()
    _print_banner(config)

    dashboard: Dashboard | None = None
    logger: RequestLogger
    if plain:
        logger = ConsoleLogger(console)
    else:
        dashboard = Dashboard(config)
        logger = dashboard

    import uvicorn

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_banner(config: Config):
    """Print startup banner."""
    base_url = f"http://localhost:{config.proxy.port}"
    console.print("[bold cyan]=== RENDER PROXY SERVER STARTED ===[/bold cyan]")
    console.print(f"[bold]Server URL:[/bold] {base_url}")
    console.print(f"[bold]Health check:[/bold] {base_url}/health")
    console.print(f"[bold]Proxy endpoint:[/bold] {base_url}/proxy?url=YOUR_URL")
    console.print(f"[bold]Allowed domains:[/bold] {', '.join(config.allowed_domains)}")


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Render Proxy[/bold cyan]

Forwards GET/POST requests to allow-listed API hosts.

[bold]Usage:[/bold]
    render-proxy              Start with live dashboard
    render-proxy --plain      Start with line-per-request logging
    render-proxy --domains    List allowed domains
    render-proxy --help       Show this help

[bold]Environment:[/bold]
    PORT    Listening port (default 3000)
    HOST    Bind address (default 0.0.0.0)
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
