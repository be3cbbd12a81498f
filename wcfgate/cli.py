"""wcfgate CLI - Command-line interface for the WeChat gateway.

Provides commands for serving the API, inspecting configuration and
printing the version.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.panel import Panel

from wcfgate.config import GatewayConfig, get_config, load_config
from wcfgate.errors import BackendUnavailableError, ConfigurationError
from wcfgate.errors.base import ErrorCode
from wcfgate.observability.logging import configure_logging

console = Console()
logger = logging.getLogger(__name__)


def _resolve_config(args: argparse.Namespace) -> GatewayConfig:
    """Config from ``--config`` when given, else the global config."""
    if getattr(args, "config", None):
        return load_config(Path(args.config).expanduser())
    return get_config()


def cmd_version(args: argparse.Namespace) -> int:
    """Display version information.

    Args:
        args: Parsed arguments.

    Returns:
        Exit code.
    """
    from wcfgate import __version__

    console.print(f"WCF Gateway v{__version__}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the effective configuration as JSON."""
    config = _resolve_config(args)
    console.print_json(json.dumps(config.model_dump()))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Build the backend and start the API server.

    Args:
        args: Parsed arguments with host, port, config and backend options.

    Returns:
        Exit code. 1 when the backend cannot be created.
    """
    import uvicorn

    from api.main import create_app
    from wcfgate.backend import create_backend

    config = _resolve_config(args).model_copy(deep=True)
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.backend:
        config.backend.factory = args.backend

    configure_logging(
        logging.DEBUG if args.verbose else config.logging.level,
        json_format=config.logging.json_format,
    )

    try:
        if not config.backend.factory:
            raise ConfigurationError(
                "No backend factory configured; pass --backend module:callable",
                config_key="backend.factory",
                code=ErrorCode.CFG_MISSING,
            )
        backend = create_backend(config.backend.factory)
    except (ConfigurationError, BackendUnavailableError) as e:
        console.print(f"[red]Cannot start gateway: {e}[/red]")
        logger.error("Backend setup failed: %r", e)
        return 1

    host = config.server.host
    port = config.server.port
    console.print(
        Panel(
            f"[bold green]Starting WCF Gateway[/bold green]\n"
            f"Host: {host}\n"
            f"Port: {port}\n"
            f"Backend: {config.backend.factory}\n"
            f"Docs: http://{host}:{port}/swagger",
            title="API Server",
        )
    )

    try:
        uvicorn.run(create_app(backend, config), host=host, port=port, log_level="info")
        return 0
    except Exception as e:
        console.print(f"[red]Error starting server: {e}[/red]")
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="wcfgate",
        description="WCF Gateway - REST API over a WeChat automation backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wcfgate serve --backend mypkg.wcf:connect   Start the API server
  wcfgate serve --port 10086                  Start server on custom port
  wcfgate config                              Show the effective configuration
        """,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Version command (also accessible via --version)
    version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
    )
    version_parser.set_defaults(func=cmd_version)

    # Config command
    config_parser = subparsers.add_parser(
        "config",
        help="Print the effective configuration",
    )
    config_parser.add_argument(
        "-c",
        "--config",
        help="Path to config JSON (default: $WCFGATE_CONFIG or ~/.wcfgate/config.json)",
    )
    config_parser.set_defaults(func=cmd_config)

    # Serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the API server",
    )
    serve_parser.add_argument(
        "--host",
        help="Host to bind to (default: from config, 127.0.0.1)",
    )
    serve_parser.add_argument(
        "-p",
        "--port",
        type=int,
        help="Port to bind to (default: from config, 10010)",
    )
    serve_parser.add_argument(
        "-c",
        "--config",
        help="Path to config JSON (default: $WCFGATE_CONFIG or ~/.wcfgate/config.json)",
    )
    serve_parser.add_argument(
        "-b",
        "--backend",
        help="Backend factory as module:callable (overrides backend.factory)",
    )
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. Uses sys.argv if None.

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        return cmd_version(args)

    if args.command is None:
        parser.print_help()
        return 0

    result: int = args.func(args)
    return result


def run() -> NoReturn:
    """Entry point that handles exit codes."""
    try:
        exit_code = main()
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted.[/dim]")
        exit_code = 130
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        logger.exception("Unexpected error")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    run()
