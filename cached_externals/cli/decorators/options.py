"""Shared options and error handling for CLI commands"""

import sys
from functools import wraps
from typing import Callable

import click
from rich.markup import escape

from ..utils.output import console
from ...api.exceptions import ExternalsError
from ...constants import EMOJI_ERROR


def remote_options(func: Callable) -> Callable:
    """Add deployment target options and apply them to the CLI context

    The wrapped command receives only its own parameters; the target options
    are consumed here and merged into the configuration.
    """
    @click.option('--shared-path', help='Shared directory on the deployment target')
    @click.option('--release-path', help='Latest release directory on the deployment target')
    @click.option('--host', help='Run remote commands on this host over ssh')
    @click.option('--user', 'ssh_user', help='ssh login user')
    @click.option('--port', 'ssh_port', type=int, help='ssh port')
    @wraps(func)
    def wrapper(*args, shared_path, release_path, host, ssh_user, ssh_port, **kwargs):
        ctx = click.get_current_context()
        ctx.obj.configure(
            shared_path=shared_path,
            latest_release=release_path,
            host=host,
            ssh_user=ssh_user,
            ssh_port=ssh_port
        )
        return func(*args, **kwargs)

    return wrapper


def handle_errors(func: Callable) -> Callable:
    """Report ExternalsError failures and exit with status 1"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ExternalsError as e:
            console.print(f"[red]{EMOJI_ERROR} {escape(str(e))}[/red]")
            sys.exit(1)

    return wrapper
