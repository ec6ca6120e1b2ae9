"""
Conductor Utility Functions

Helpers shared by the server adapters and the CLI.
"""

import socket
import sys

import click


def check_port_available(host: str, port: int) -> bool:
    """
    Check if a port is available for binding.

    Args:
        host: Host address to check
        port: Port number to check

    Returns:
        True if port is available, False otherwise
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            return True
    except OSError:
        return False


def ensure_port_available(host: str, port: int, exit_on_fail: bool = True) -> bool:
    """
    Ensure a port is available, with optional error handling.

    Raises:
        SystemExit: If port is unavailable and exit_on_fail is True
    """
    if not check_port_available(host, port):
        click.secho("\n" + "=" * 50, fg='red', bold=True)
        click.secho(f"ERROR: Port {port} is already in use!", fg='red', bold=True)
        click.secho("=" * 50, fg='red', bold=True)
        click.secho("\nPlease either:", fg='yellow')
        click.secho(f"  1. Stop the process using port {port}", fg='yellow')
        click.secho("  2. Change PORT in your config (or set CONDUCTOR_PORT)\n", fg='yellow')

        if exit_on_fail:
            sys.exit(1)
        return False

    return True


def print_banner(project_name: str, framework: str, port: int) -> None:
    """Startup banner printed by the adapters' ``run_server``."""
    click.secho("\n" + "=" * 50, fg='cyan', bold=True)
    click.secho(f"{project_name} - Conductor + {framework}", fg='cyan', bold=True)
    click.secho("=" * 50, fg='cyan', bold=True)
    click.echo("\nStarting server...")
    click.echo(f"Home: http://localhost:{port}/\n")


def request_url(scheme: str, host: str, path: str, query: str = "") -> str:
    """Rebuild the requested URL string from framework request parts."""
    url = f"{scheme}://{host}{path}"
    if query:
        url = f"{url}?{query}"
    return url
