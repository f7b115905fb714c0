"""Hook command implementation"""

import sys

import click

from ..decorators import handle_errors, remote_options
from ..utils.output import console, format_errors
from ...constants import EMOJI_SUCCESS
from ...plugins import HookPoint


@click.command()
@click.argument('hook_point', type=click.Choice([hp.value for hp in HookPoint]))
@remote_options
@click.pass_obj
@handle_errors
def hook(obj, hook_point):
    """Fire a deployment lifecycle hook point

    Lets a deployment pipeline hand control to the registered plugins, e.g.
    to set up externals before the release is finalized. Target options go
    before the hook point, since anything after it starts the next chained
    command:

        cached-externals hook --shared-path ... --release-path ... deploy.finalize_update.pre
    """
    context = obj.fire(HookPoint(hook_point))

    if context.has_errors() or context.warnings:
        format_errors(context.errors, context.warnings)
    if context.has_errors():
        sys.exit(1)

    console.print(f"[green]{EMOJI_SUCCESS}[/green] {hook_point}")
