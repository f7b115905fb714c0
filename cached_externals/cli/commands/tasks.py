"""Tasks command implementation"""

import click
from rich import box
from rich.table import Table

from ..utils.output import console


@click.command()
@click.pass_obj
def tasks(obj):
    """List tasks registered by plugins"""
    table = Table(title="Tasks", box=box.ROUNDED)
    table.add_column("Task", style="cyan", no_wrap=True)
    table.add_column("Plugin", style="yellow", no_wrap=True)
    table.add_column("Description")

    for task in obj.plugin_manager.list_tasks():
        table.add_row(task.name, task.plugin, task.description)

    console.print(table)
