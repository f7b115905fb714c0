"""Update command implementation"""

import sys

import click

from ..decorators import handle_errors, remote_options
from ..utils.output import format_errors, format_externals_result
from ...plugins import HookPoint


@click.command()
@remote_options
@click.pass_obj
@handle_errors
def update(obj):
    """Update defined external modules

    In local mode this synchronizes each local checkout with the HEAD of
    the SCM configured in externals.yml. Otherwise it is the same as setup.
    """
    context = obj.run_task(
        "externals:update",
        pre=HookPoint.EXTERNALS_UPDATE_PRE,
        post=HookPoint.EXTERNALS_UPDATE_POST
    )

    result = context.metadata.get('externals_result')
    if result is not None:
        format_externals_result(result)

    if context.has_errors() or context.warnings:
        format_errors(context.errors, context.warnings)
    if context.has_errors():
        sys.exit(1)
