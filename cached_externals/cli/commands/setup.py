"""Setup command implementation"""

import sys

import click

from ..decorators import handle_errors, remote_options
from ..utils.output import format_errors, format_externals_result
from ...plugins import HookPoint


@click.command()
@remote_options
@click.pass_obj
@handle_errors
def setup(obj):
    """Set up all defined external modules

    Checks whether any module needs to be checked out (new or updated
    revision) and creates symlinks to them. In local mode (see the 'local'
    command) checkouts go to ../externals/ relative to the project root.
    Otherwise they are made on the deployment target under
    [shared_path]/externals and linked into the latest release.

    Examples:

        # Link externals into the local working copy
        cached-externals local setup

        # Link externals into a release on a server
        cached-externals setup --host app1 \\
            --shared-path /srv/app/shared --release-path /srv/app/releases/20240120
    """
    context = obj.run_task(
        "externals:setup",
        pre=HookPoint.EXTERNALS_SETUP_PRE,
        post=HookPoint.EXTERNALS_SETUP_POST
    )

    result = context.metadata.get('externals_result')
    if result is not None:
        format_externals_result(result)

    if context.has_errors() or context.warnings:
        format_errors(context.errors, context.warnings)
    if context.has_errors():
        sys.exit(1)
