# cached_externals/plugins/builtin/externals.py
"""Externals plugin wiring setup and update into the deployment lifecycle"""

from pathlib import Path
from typing import List

from ..base import HookPoint, Plugin, PluginContext, PluginInfo, PluginPriority, TaskInfo
from ...api.externals import Externals
from ...constants import Stage
from ...models import ExternalsConfig


class ExternalsPlugin(Plugin):
    """Registers the externals tasks and runs setup before finalize_update

    Setup has to happen before ``deploy:finalize_update`` rather than after
    ``deploy:update_code``: finalization touches every asset, and assets may
    be symlinks into externalized plugins that must already be linked.

    Context data used:
        externals: an :class:`Externals` instance, or
        config / project_root: used to build one
        no_release: skip this host
    """

    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name="externals",
            version="1.0.0",
            description="Check out and link external modules",
            author="vistart",
            priority=PluginPriority.HIGH,
            hook_points=[HookPoint.DEPLOY_FINALIZE_UPDATE_PRE]
        )

    def get_tasks(self) -> List[TaskInfo]:
        return [
            TaskInfo(
                name="local",
                description="Indicate that externals should be applied locally",
                handler=self.task_local
            ),
            TaskInfo(
                name="externals:setup",
                description="Set up all defined external modules",
                handler=self.task_setup
            ),
            TaskInfo(
                name="externals:update",
                description="Update defined external modules",
                handler=self.task_update
            ),
        ]

    async def task_local(self, context: PluginContext) -> PluginContext:
        """Switch the stage to local for subsequent tasks"""
        self._config(context).stage = Stage.LOCAL
        return context

    async def task_setup(self, context: PluginContext) -> PluginContext:
        if self._skip(context):
            return context
        context.metadata['externals_result'] = self._externals(context).setup()
        return context

    async def task_update(self, context: PluginContext) -> PluginContext:
        if self._skip(context):
            return context
        context.metadata['externals_result'] = self._externals(context).update()
        return context

    async def on_deploy_finalize_update_pre(self, context: PluginContext) -> PluginContext:
        """Set up externals before the release is finalized"""
        return await self.task_setup(context)

    def _skip(self, context: PluginContext) -> bool:
        if context.data.get('no_release'):
            self.logger.info("Host has no release, skipping externals")
            return True
        return False

    def _config(self, context: PluginContext) -> ExternalsConfig:
        externals = context.data.get('externals')
        if externals is not None:
            return externals.config
        return context.data.setdefault('config', ExternalsConfig())

    def _externals(self, context: PluginContext) -> Externals:
        externals = context.data.get('externals')
        if externals is None:
            externals = Externals(
                config=self._config(context),
                project_root=Path(context.data.get('project_root') or Path.cwd())
            )
            context.data['externals'] = externals
        return externals
