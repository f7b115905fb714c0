# cached_externals/cli/main.py
"""Main CLI entry point for cached-externals"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ..api.externals import Externals
from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from ..models import ExternalsConfig
from ..plugins import HookPoint, PluginContext, PluginManager, load_all_plugins
from ..scm import load_all_scms
from ..services import ConfigService
from ..utils.async_utils import run_async

# Import all commands
from .commands import hook, list_externals, local, setup, tasks, update

console = Console()


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy configuration loading

    Chained commands share one context: ``local`` switches the stage of the
    loaded configuration and later commands see the change.
    """

    def __init__(self,
                 project_root: Optional[Path] = None,
                 config_path: Optional[Path] = None,
                 plugin_manager: Optional[PluginManager] = None):
        """Initialize CLI context"""
        self.project_root = Path(project_root or Path.cwd()).absolute()
        self.config_path = config_path
        self.verbose: bool = False
        self.debug: bool = False
        self._overrides: Dict[str, Any] = {}
        self._config: Optional[ExternalsConfig] = None

        if plugin_manager is None:
            plugin_manager = PluginManager()
            load_all_plugins(plugin_manager)
        self.plugin_manager = plugin_manager

    def configure(self, **overrides) -> None:
        """Apply option overrides to the configuration"""
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if not overrides:
            return
        if self._config is None:
            self._overrides.update(overrides)
        else:
            self._config = self._config.merge(overrides)

    @property
    def config(self) -> ExternalsConfig:
        """Effective configuration (lazy loading)"""
        if self._config is None:
            service = ConfigService(self.project_root, self.config_path)
            self._config = service.load_config(self._overrides)
            count = load_all_scms(self._config.scm_modules)
            if self.debug:
                console.print(f"[dim]Loaded {count} SCM implementation(s)[/dim]")
        return self._config

    def externals(self) -> Externals:
        """Create an Externals manager for the current configuration"""
        return Externals(config=self.config, project_root=self.project_root, console=console)

    def new_plugin_context(self, operation: str) -> PluginContext:
        return PluginContext(
            hook_point=None,
            operation=operation,
            data={
                'config': self.config,
                'project_root': self.project_root,
            }
        )

    def run_task(self,
                 name: str,
                 pre: Optional[HookPoint] = None,
                 post: Optional[HookPoint] = None) -> PluginContext:
        """Run a plugin task, firing the surrounding hook points"""
        context = self.new_plugin_context(name)
        return run_async(self._run_task(name, context, pre, post))

    def fire(self, hook_point: HookPoint) -> PluginContext:
        """Fire a single hook point"""
        context = self.new_plugin_context(hook_point.value)
        return run_async(self.plugin_manager.execute_hook(hook_point, context))

    async def _run_task(self, name, context, pre, post) -> PluginContext:
        if pre:
            context = await self.plugin_manager.execute_hook(pre, context)
            if context.has_errors():
                return context

        context = await self.plugin_manager.run_task(name, context)

        if post:
            context = await self.plugin_manager.execute_hook(post, context)
        return context


@click.group(name=APP_NAME, chain=True)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('--project-root', type=click.Path(file_okay=False, path_type=Path),
              help='Application root (defaults to the current directory)')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file (defaults to .cached-externals.yaml)')
@click.option('--manifest', help='Externals manifest (defaults to config/externals.yml)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, project_root, config_path, manifest):
    """Cached Externals - vendored SCM checkouts for deployments

    Reads config/externals.yml, checks out each external module at the
    requested revision and symlinks it into place. Commands can be chained:

        cached-externals local setup
    """
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    if ctx.obj is None:
        ctx.obj = Context(project_root=project_root, config_path=config_path)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.configure(manifest_path=manifest)


# Register commands
cli.add_command(local.local)
cli.add_command(setup.setup)
cli.add_command(update.update)
cli.add_command(list_externals.list_externals)
cli.add_command(hook.hook)
cli.add_command(tasks.tasks)


def main():
    """Main entry point for the CLI application"""
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
