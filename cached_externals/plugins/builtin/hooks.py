# cached_externals/plugins/builtin/hooks.py
"""Lifecycle hooks plugin for custom scripts"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

from ..base import HookPoint, Plugin, PluginContext, PluginInfo, PluginPriority

DEFAULT_HOOKS_DIR = '.cached-externals/hooks'


class LifecycleHooksPlugin(Plugin):
    """Execute project scripts at every hook point

    A script named after the hook point with dots replaced by dashes, e.g.
    ``.cached-externals/hooks/externals-setup-post.sh`` or
    ``deploy-finalize_update-post.sh``, runs when that hook
    fires. Numbered variants (``10-externals-setup-post.sh``) run in order.
    """

    def __init__(self, config: Dict[str, Any] = None):
        super().__init__(config)

        self.hooks_dir = Path(self.config.get('hooks_dir', DEFAULT_HOOKS_DIR))
        self.timeout = self.config.get('timeout', 300)

    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name="lifecycle-hooks",
            version="1.0.0",
            description="Execute custom scripts at lifecycle points",
            author="vistart",
            priority=PluginPriority.LOW,  # Run after other plugins
            hook_points=list(HookPoint),
            config=self.config
        )

    async def handle_hook(self, context: PluginContext) -> PluginContext:
        """Execute scripts for any registered hook point"""
        hooks_dir = self._resolve_hooks_dir(context)

        for script in self._find_hook_scripts(hooks_dir, context.hook_point.value):
            self.logger.info(f"Executing hook script: {script}")
            if not await self._execute_script(script, context):
                context.add_error(f"Hook script failed: {script}")

        return context

    def _resolve_hooks_dir(self, context: PluginContext) -> Path:
        if self.hooks_dir.is_absolute():
            return self.hooks_dir
        project_root = context.data.get('project_root') or Path.cwd()
        return Path(project_root) / self.hooks_dir

    def _find_hook_scripts(self, hooks_dir: Path, hook_name: str) -> List[Path]:
        """Find scripts for a specific hook"""
        if not hooks_dir.is_dir():
            return []

        script_prefix = hook_name.replace('.', '-')
        scripts = []

        for ext in ['.sh', '.py', '']:
            script_path = hooks_dir / f"{script_prefix}{ext}"
            if script_path.is_file():
                scripts.append(script_path)

        # Numbered scripts run after the plain ones, in name order
        scripts.extend(
            s for s in sorted(hooks_dir.glob(f"[0-9][0-9]-{script_prefix}*")) if s.is_file()
        )

        return scripts

    async def _execute_script(self, script_path: Path, context: PluginContext) -> bool:
        """Execute a hook script"""
        env = os.environ.copy()
        env['CACHED_EXTERNALS_HOOK'] = context.hook_point.value
        env['CACHED_EXTERNALS_OPERATION'] = context.operation

        for key, value in context.data.items():
            if isinstance(value, (str, int, float, bool, Path)):
                env[f"CACHED_EXTERNALS_{key.upper()}"] = str(value)

        if script_path.suffix == '.py':
            cmd = [sys.executable, str(script_path)]
        elif os.access(script_path, os.X_OK):
            cmd = [str(script_path)]
        else:
            cmd = ['sh', str(script_path)]

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            self.logger.error(f"Failed to execute hook script: {e}")
            return False

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            self.logger.error(f"Hook script timed out after {self.timeout}s")
            return False

        if stdout:
            self.logger.info(f"Hook output: {stdout.decode().strip()}")
        if stderr:
            self.logger.warning(f"Hook error: {stderr.decode().strip()}")

        return process.returncode == 0
