"""Local mode command"""

import click


@click.command()
@click.pass_obj
def local(obj):
    """Indicate that externals should be applied locally

    Chain it before another command:

        cached-externals local setup
    """
    obj.run_task("local")
