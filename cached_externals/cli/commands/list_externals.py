"""List command implementation"""

import json

import click

from ..decorators import handle_errors, remote_options
from ..utils.output import console, format_plan


@click.command(name='list')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@remote_options
@click.pass_obj
@handle_errors
def list_externals(obj, as_json):
    """List external modules and where they will be linked"""
    externals = obj.externals()
    states = externals.plan()

    if as_json:
        click.echo(json.dumps([s.to_dict() for s in states], indent=2))
        return

    format_plan(states, obj.config.stage.value)
    if obj.verbose:
        console.print(f"[dim]Manifest: {externals.manifest_path}[/dim]")
