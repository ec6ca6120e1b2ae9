"""
Conductor CLI - Create Commands

Generates controller modules from Jinja2 templates.
"""

import sys
from pathlib import Path

import click
import questionary

from conductor.config import Config
from .._template_loader import jinja_env
from .helpers import (
    controllers_dir,
    is_conductor_project,
    method_name,
    parse_actions,
    split_controller_name,
    to_module_name,
    validate_controller_name,
)
from .style import custom_style

DEFAULT_ACTIONS = "get:index"


@click.group()
def create():
    """
    Create code (controllers)

    Available generators:
    - controller: Generate a new controller module
    """
    pass


@create.command(name='controller')
@click.argument('name', required=False)
@click.option('--rest/--plain', 'rest', default=None,
              help='Generate a RestController (formatted bodies) or a plain Controller')
@click.option('--actions', default=None,
              help='Comma-separated actions, optionally method-prefixed (e.g. get:show,post:create,index)')
@click.option('--app-dir', default='.', type=click.Path(file_okay=False),
              help='App directory containing controllers/')
@click.option('--dry-run', is_flag=True, default=False,
              help='Preview the generated module without writing it')
def create_controller(name, rest, actions, app_dir, dry_run):
    """
    Generate a new controller module.

    Dotted names become namespace folders: admin.users is written to
    controllers/admin/users.py and routed at /admin/Users.

    Examples:
        conductor create controller
        conductor create controller widgets --rest --actions get:show,get:index
        conductor create controller admin.users --plain --actions index
    """
    click.secho("\n" + "=" * 50, fg='cyan', bold=True)
    click.secho("Generating Controller", fg='cyan', bold=True)
    click.secho("=" * 50 + "\n", fg='cyan', bold=True)

    app_dir = Path(app_dir)
    if not is_conductor_project(app_dir):
        click.secho(f"[ERROR] No controllers/ directory in {app_dir.resolve()}", fg='red', bold=True)
        click.secho("Create it first, or pass --app-dir.", fg='yellow')
        sys.exit(1)

    # Interactive prompts if not provided via arguments
    if not name:
        name = questionary.text(
            "Controller name (e.g. widgets or admin.users):",
            validate=validate_controller_name,
            style=custom_style
        ).ask()
        if not name:
            click.secho("\n[ERROR] Controller name is required!", fg='red', bold=True)
            sys.exit(1)

    if rest is None:
        kind = questionary.select(
            "Which kind of controller?",
            choices=['RestController', 'Controller'],
            default='RestController',
            style=custom_style
        ).ask()
        if not kind:
            click.secho("\n[ERROR] Controller kind is required!", fg='red', bold=True)
            sys.exit(1)
        rest = kind == 'RestController'

    if actions is None:
        actions = questionary.text(
            "Actions (comma-separated, e.g. get:show,post:create,index):",
            default=DEFAULT_ACTIONS,
            style=custom_style
        ).ask()
        if actions is None:
            sys.exit(1)

    try:
        namespace, class_name = split_controller_name(name)
    except ValueError as e:
        click.secho(f"\n[ERROR] {e}", fg='red', bold=True)
        sys.exit(1)

    prefixes = [method.lower() for method in Config.Internal.SUPPORTED_HTTP_METHODS] + [Config.Internal.ACTION_PREFIX]
    try:
        action_pairs = parse_actions(actions, prefixes) or parse_actions(DEFAULT_ACTIONS, prefixes)
    except click.BadParameter as e:
        click.secho(f"\n[ERROR] {e.message}", fg='red', bold=True)
        sys.exit(1)

    target_dir = controllers_dir(app_dir).joinpath(*namespace)
    target_file = target_dir / f"{to_module_name(class_name)}.py"
    if target_file.exists():
        click.secho(f"\n[ERROR] {target_file} already exists!", fg='red', bold=True)
        click.secho("Choose a different name or delete the existing controller first.", fg='yellow')
        sys.exit(1)

    template = jinja_env.get_template('controller.py.j2')
    content = template.render(
        class_name=class_name,
        base_class='RestController' if rest else 'Controller',
        rest=rest,
        url_path='/'.join(namespace + [class_name]),
        actions=[
            {
                'name': action,
                'prefix': prefix,
                'verb': 'ANY' if prefix == Config.Internal.ACTION_PREFIX else prefix.upper(),
                'method_name': method_name(prefix, action),
            }
            for prefix, action in action_pairs
        ],
    )

    if dry_run:
        click.secho("[DRY-RUN] Preview of changes (no files will be created):", fg='yellow', bold=True)
        click.secho(f"\nWould create: {target_file}\n", fg='cyan')
        click.echo(content)
        return

    target_dir.mkdir(parents=True, exist_ok=True)
    target_file.write_text(content, encoding='utf-8')

    click.secho("[OK] Controller created: ", fg='green', bold=True, nl=False)
    click.secho(f"{target_file}", fg='cyan')
    click.secho("     Class: ", fg='blue', nl=False)
    click.secho(class_name, fg='green', bold=True)
    click.secho("     Actions: ", fg='blue', nl=False)
    click.secho(', '.join(method_name(prefix, action) for prefix, action in action_pairs), fg='yellow')
