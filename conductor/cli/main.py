"""
Conductor CLI Commands

Inspect an app's controllers, dispatch URLs in-process and generate code.
"""

import sys
from pathlib import Path

import click

from conductor.cli.commands.create_command import create
from conductor.cli.commands.helpers import CONFIGS, is_conductor_project, resolve_config
from conductor.core.delegate import Delegate
from conductor.logging import setup_logging

app_dir_option = click.option(
    '--app-dir', default='.', type=click.Path(file_okay=False),
    help='App directory containing controllers/'
)
config_option = click.option(
    '--config', 'config_name', default='default',
    type=click.Choice(sorted(CONFIGS), case_sensitive=False),
    help='Configuration preset'
)


def _version_callback(ctx, param, value):
    if value:
        from conductor import __version__
        click.echo(f'Conductor CLI v{__version__}')
        ctx.exit()


@click.group()
@click.option('--version', '-V', is_flag=True, callback=_version_callback, expose_value=False, is_eager=True, help='Show version and exit')
@click.option('--verbose', '-v', is_flag=True, default=False, help='Log framework activity to stdout')
def cli(verbose):
    """
    Conductor CLI - MVC routing for Python backends

    Inspect controllers, call URLs and generate code.
    """
    if verbose:
        setup_logging(level="DEBUG")


def _load_delegate(app_dir: str, config_name: str) -> Delegate:
    config = resolve_config(config_name)
    if not is_conductor_project(Path(app_dir), config):
        click.secho(f"[ERROR] No {config.Internal.CONTROLLERS_DIR_NAME}/ directory in {Path(app_dir).resolve()}", fg='red', bold=True)
        sys.exit(1)
    return Delegate(app_dir=Path(app_dir), config=config)


@cli.command()
@app_dir_option
@config_option
def routes(app_dir, config_name):
    """
    List registered controllers and their actions.

    Examples:
        conductor routes
        conductor routes --app-dir ./app
    """
    delegate = _load_delegate(app_dir, config_name)

    if not len(delegate.registry):
        click.secho("[INFO] No controllers found.", fg='yellow')
        return

    click.secho(f"Controllers ({len(delegate.registry)}):", fg='blue', bold=True)
    for entry in delegate.registry:
        click.secho(f"  /{entry.name.replace('.', '/')}", fg='green', bold=True, nl=False)
        if entry.source:
            click.secho(f"  ({entry.source})", fg='cyan', nl=False)
        click.echo()
        for action in entry.controller_class.actions():
            click.echo(f"      {action}")


@cli.command()
@click.argument('url')
@click.option('--method', '-X', default=None, help='HTTP method (omit for a CLI dispatch)')
@app_dir_option
@config_option
def call(url, method, app_dir, config_name):
    """
    Dispatch URL in-process and print the response.

    Examples:
        conductor call /Widgets/show.json --method GET
        conductor call "http://localhost/Widgets/list.csv?page=2" -X GET
    """
    delegate = _load_delegate(app_dir, config_name)
    response = delegate.bootstrap(url, method=method)

    for line in response.header_lines():
        click.echo(line)
    click.echo()
    click.echo(response.text)

    if response.status >= 400:
        sys.exit(1)


# Register all command groups
cli.add_command(create)


if __name__ == '__main__':
    cli()
